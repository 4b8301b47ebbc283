import logging
from dataclasses import dataclass

from api.client import ApiClient
from app.settings import Settings
from data.enums import Faction
from data.models.agent import Registration
from utils.config import ConfigData, write_config_file

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass
class AppContext:
    settings: Settings
    client: ApiClient


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT, force=True)
    # urllib3 logs every retry at DEBUG; keep it quiet unless we are debugging
    if level.upper() != "DEBUG":
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_app(settings: Settings) -> AppContext:
    logging.debug(f"Client initializing against {settings.api_url}")
    client = ApiClient(settings.agent_token, api_url=settings.api_url, account_key=settings.account_token)
    return AppContext(settings=settings, client=client)


def register_agent(ctx: AppContext, symbol: str, faction: Faction) -> Registration:
    """Register a new agent and persist its token so later runs pick it up."""
    registration = ctx.client.agent.register(symbol, faction)
    write_config_file(ConfigData(token=registration.token), ctx.settings.config_path)
    ctx.settings.agent_token = registration.token
    ctx.settings.token_source = str(ctx.settings.config_path)
    logging.info(f"Saved token for {registration.agent.symbol} to {ctx.settings.config_path}")
    return registration
