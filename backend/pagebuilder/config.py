import os
from dotenv import load_dotenv

load_dotenv()


def _split_names(raw: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in raw.split(",") if name.strip())


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Filesystem source of truth for templates and their sections
    PAGEBUILDER_TEMPLATES_ROOT = os.getenv(
        "PAGEBUILDER_TEMPLATES_ROOT", os.path.join(os.getcwd(), "templates", "pages")
    )
    PAGEBUILDER_DYNAMIC_MARKER = os.getenv("PAGEBUILDER_DYNAMIC_MARKER", "dynamic")
    PAGEBUILDER_CONFIG_FILENAMES = _split_names(
        os.getenv("PAGEBUILDER_CONFIG_FILENAMES", "config,config.yaml,config.yml,config.json")
    )

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///pagebuilder.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
