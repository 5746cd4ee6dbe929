"""
Configuration management for gqlbundle
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    # Root type names used in generated definitions and resolver tables
    root_query: str = "RootQuery"
    root_mutation: str = "RootMutation"
    root_subscription: str = "RootSubscription"

    # Chain colliding resolvers instead of letting the later module win
    combine: bool = True

    # YAML file listing module declarations for the loader and CLI
    modules_config_path: str | None = None

    # Logging
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "GQLBUNDLE_"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
