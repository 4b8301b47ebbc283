"""
Runtime settings resolved once at startup from .env, the environment and config.json.
"""
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from api.client import DEFAULT_API_URL
from api.errors import MissingTokenError
from utils.config import default_config_path, read_config_file, read_default_config_file


@dataclass
class Settings:
    agent_token: str | None
    account_token: str | None
    api_url: str
    config_path: Path
    log_level: str = "INFO"
    # where agent_token came from: "environment", the config file path, or None
    token_source: str | None = None

    def require_token(self) -> str:
        if not self.agent_token:
            raise MissingTokenError(
                "AGENT_TOKEN not found. Set it in your .env file or environment, "
                "or register a new agent with `register`."
            )
        return self.agent_token


def load_settings(env_file: str | None = None) -> Settings:
    # load environment variables from ./.env unless a file was given
    load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True))

    custom_config = os.getenv("SPACETRADERS_CONFIG")
    config_path = Path(custom_config) if custom_config else default_config_path()
    agent_token = os.getenv("AGENT_TOKEN") or None
    token_source = "environment" if agent_token else None
    if not agent_token:
        config_data = read_config_file(config_path) if custom_config else read_default_config_file()
        if config_data and config_data.token:
            agent_token = config_data.token
            token_source = str(config_path)

    return Settings(
        agent_token=agent_token,
        account_token=os.getenv("ACCOUNT_TOKEN") or None,
        api_url=os.getenv("SPACETRADERS_API_URL") or DEFAULT_API_URL,
        config_path=config_path,
        log_level=(os.getenv("SPACETRADERS_LOG_LEVEL") or "INFO").upper(),
        token_source=token_source,
    )
