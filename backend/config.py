# backend/config.py
import os
from dotenv import load_dotenv

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

ENV_FILES = {
    "development": ".env.development",
    "production": ".env.production",
}


class CloudinaryConfig:
    def __init__(self, cloud_name=None, api_key=None, api_secret=None, folder="movieImage"):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder

    @property
    def configured(self):
        return all([self.cloud_name, self.api_key, self.api_secret])


class Config:
    """Settings for one environment profile.

    Built once by ``load_config`` and handed to ``create_app``; nothing
    reads it as a module global.
    """

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    def __init__(self, env="development", **overrides):
        self.ENV = env
        self.SECRET_KEY = os.getenv("SECRET_KEY", "fallback_key")
        self.PORT = int(os.getenv("PORT", "4001"))
        self.APP_ORIGIN = os.getenv("APP_ORIGIN")

        # identity provider, loaded but not enforced by any route
        self.AUTH0_CLIENT_ORIGIN = self.APP_ORIGIN
        self.AUTH0_AUDIENCE = os.getenv("AUTH0_AUDIENCE")
        self.AUTH0_ISSUER = os.getenv("AUTH0_ISSUER")

        self.CLOUDINARY = CloudinaryConfig(
            cloud_name=os.getenv("CLOUD_NAME"),
            api_key=os.getenv("CLOUDINARY_API_KEY"),
            api_secret=os.getenv("CLOUDINARY_API_SECRET"),
            folder=os.getenv("CLOUDINARY_FOLDER", "movieImage"),
        )

        if "SQLALCHEMY_DATABASE_URI" not in overrides:
            self.SQLALCHEMY_DATABASE_URI = database_uri_from_env()

        for key, value in overrides.items():
            setattr(self, key, value)


def database_uri_from_env():
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    db_user = os.getenv("DB_USER")
    db_password = os.getenv("DB_PASSWORD")
    db_host = os.getenv("DB_HOST", "localhost")
    db_port = os.getenv("DB_PORT", "3306")
    db_name = os.getenv("DB_NAME")

    if not all([db_user, db_password, db_host, db_port, db_name]):
        raise ValueError("Missing database environment variables (DATABASE_URL or DB_*)")

    return f"mysql+pymysql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def load_config(env=None, **overrides):
    """Load the variable file for ``env`` (or ``APP_ENV``) and build a Config."""
    env = env or os.getenv("APP_ENV", "development")
    if env not in ENV_FILES:
        raise ValueError(f"Unknown environment profile: {env}")

    load_dotenv(os.path.join(PROJECT_ROOT, ENV_FILES[env]))
    return Config(env=env, **overrides)
