"""Configuration management"""
from typing import Literal, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Credentials
    api_key: str = ""  # Generative API credential, required at startup
    acidnade_api_key: str = ""  # Shared secret for x-acidnade-key

    # LLM
    llm_model: str = "gemini-3-flash-preview"
    llm_temperature: float = 1.0
    llm_top_p: float = 0.95
    llm_top_k: int = 64
    llm_max_output_tokens: int = 8192
    llm_max_attempts: int = 1
    llm_backoff_seconds: float = 0.5

    # Plan policy
    delete_approval_threshold: int = 5
    ui_policy: Literal["rewrite", "drop"] = "rewrite"
    min_description_length: int = 20
    default_class_name: str = "Script"
    default_parent_path: str = "game.ServerScriptService"

    # Context summary
    summary_max_scripts: int = 10
    summary_max_recent: int = 10
    summary_preview_lines: int = 20

    # Sessions
    session_ttl_seconds: int = 3600
    session_history_limit: int = 20
    undo_log_limit: int = 10

    # CORS
    cors_origins: str = "*"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "allow"  # Allow extra fields for compatibility

    @property
    def access_key(self) -> Optional[str]:
        """Shared secret expected in x-acidnade-key, if any"""
        return self.acidnade_api_key or self.api_key or None

settings = Settings()
