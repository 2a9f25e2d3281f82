from typing import List, Optional
import os
import langchain_openai
import langchain_anthropic
import langchain_google_genai
from langchain_core.rate_limiters import InMemoryRateLimiter
from dotenv import load_dotenv

load_dotenv()


class MissingConfigurationError(Exception):
    """A required setting is not present in the environment."""
    pass


class Config:
    """configuration class for environment variable"""

    # Logging
    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv('LOG_LEVEL', 'info')

    # LLM Settings
    @property
    def MODEL_NAME(self) -> str:
        return os.getenv('MODEL_NAME', 'gemini-2.0-flash')

    @property
    def GEMINI_API_KEY(self) -> Optional[str]:
        return os.getenv('GEMINI_API_KEY')

    @property
    def OPENAI_API_KEY(self) -> Optional[str]:
        return os.getenv('OPENAI_API_KEY')

    @property
    def ANTHROPIC_API_KEY(self) -> Optional[str]:
        return os.getenv('ANTHROPIC_API_KEY')

    # Telegram Settings
    @property
    def TELEGRAM_BOT_TOKEN(self) -> Optional[str]:
        return os.getenv('TELEGRAM_BOT_TOKEN')

    @property
    def TELEGRAM_CHANNEL_ID(self) -> Optional[str]:
        return os.getenv('TELEGRAM_CHANNEL_ID')

    @property
    def TELEGRAM_API_BASE_URL(self) -> str:
        return os.getenv('TELEGRAM_API_BASE_URL', 'https://api.telegram.org')

    # News Collection Settings
    @property
    def NEWS_OUTPUT_DIR(self) -> str:
        return os.getenv('NEWS_OUTPUT_DIR', 'news')

    @property
    def ARTICLE_DELAY_SECONDS(self) -> float:
        return float(os.getenv('ARTICLE_DELAY_SECONDS', '1.5'))

    @property
    def AGENT_ARTICLE_DELAY_SECONDS(self) -> float:
        return float(os.getenv('AGENT_ARTICLE_DELAY_SECONDS', '2.0'))

    @property
    def LANDING_ARTICLE_DELAY_SECONDS(self) -> float:
        return float(os.getenv('LANDING_ARTICLE_DELAY_SECONDS', '3.0'))

    @property
    def SOURCE_DELAY_SECONDS(self) -> float:
        return float(os.getenv('SOURCE_DELAY_SECONDS', '0'))

    @property
    def FEED_FETCH_TIMEOUT_SECONDS(self) -> float:
        return float(os.getenv('FEED_FETCH_TIMEOUT_SECONDS', '30'))

    # Publishing Settings
    @property
    def PUBLISH_PREFERRED_CATEGORIES(self) -> List[str]:
        raw = os.getenv('PUBLISH_PREFERRED_CATEGORIES', 'astronomy,ai')
        return [c.strip() for c in raw.split(',') if c.strip()]

    @property
    def SITE_NAME(self) -> str:
        return os.getenv('SITE_NAME', 'FalakTech')

    @property
    def SITE_URL(self) -> str:
        return os.getenv('SITE_URL', 'https://falaktech.my')

    def require(self, name: str) -> str:
        """Return a setting that must be present, or raise MissingConfigurationError."""
        value = getattr(self, name)
        if not value:
            raise MissingConfigurationError(f"Missing required configuration: {name}")
        return value


CONFIG = Config()


def get_llm(model_name: Optional[str] = None, temperature: float = 0.0, rate_limiter: Optional[InMemoryRateLimiter] = None):
    """Get the language model based on config."""

    model_name = model_name or CONFIG.MODEL_NAME or "gemini-2.0-flash"

    if model_name.startswith('gpt'):
        api_key = CONFIG.require('OPENAI_API_KEY')
        return langchain_openai.ChatOpenAI(model=model_name, temperature=temperature, api_key=api_key, rate_limiter=rate_limiter)
    elif model_name.startswith('claude'):
        api_key = CONFIG.require('ANTHROPIC_API_KEY')
        return langchain_anthropic.ChatAnthropic(model_name=model_name, temperature=temperature, api_key=api_key, timeout=30, stop=None, rate_limiter=rate_limiter)
    elif model_name.startswith('gemini') or model_name.startswith('models/gemini'):
        api_key = CONFIG.require('GEMINI_API_KEY')
        return langchain_google_genai.ChatGoogleGenerativeAI(model=model_name, temperature=temperature, google_api_key=api_key, rate_limiter=rate_limiter)
    else:
        raise ValueError(f"Unsupported model: {model_name}.")


__all__ = ["CONFIG", "Config", "MissingConfigurationError", "get_llm"]
