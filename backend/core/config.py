from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # 上傳檔案目錄（同時以 /uploads 靜態路徑對外）
    UPLOAD_DIR: str = Field("uploads", validation_alias="UPLOAD_DIR")
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # PDF 表頭兩張固定圖片
    HEADER_EMBLEM_URL: str = (
        "https://upload.wikimedia.org/wikipedia/commons/thumb/5/55/"
        "Emblem_of_India.svg/150px-Emblem_of_India.svg.png"
    )
    HEADER_LOGO_URL: str = (
        "https://thumbs.dreamstime.com/b/logo-icon-vector-logos-icons-set-social-media-"
        "flat-banner-vectors-svg-eps-jpg-jpeg-paper-texture-glossy-emblem-wallpaper-210441921.jpg"
    )

    # Image fetch
    FETCH_USER_AGENT: str = "Mozilla/5.0 (Python) Rail-QR-App/1.0"
    FETCH_TIMEOUT_SECONDS: float = 10.0
    FETCH_MAX_REDIRECTS: int = 5

    # Summarizer：mock / openai / ollama
    SUMMARIZER_BACKEND: str = "mock"
    SUMMARY_DELAY_SECONDS: float = 1.2
    SUMMARIZER_TIMEOUT_SECONDS: float = 60.0
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OLLAMA_URL: str = "http://localhost:11434/api/generate"
    OLLAMA_MODEL: str = "llama3"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

settings = Settings()
