import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


class Config:
    BASE_DIR = Path(__file__).resolve().parent.parent
    DATA_DIR = Path(os.getenv("SCRIBEDB_DATA_DIR", str(BASE_DIR / "data")))
    LOG_LEVEL = os.getenv("SCRIBEDB_LOG_LEVEL", "DEBUG").upper()


class DevConfig(Config):
    DEBUG = True


class ProdConfig(Config):
    DEBUG = False
    LOG_LEVEL = os.getenv("SCRIBEDB_LOG_LEVEL", "INFO").upper()
