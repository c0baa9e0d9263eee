from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    VENUE_NAME: str = "Bjørkvang"
    VENUE_TIMEZONE: str = "Europe/Oslo"

    STATUS_POLICY: str = "board"  # "board" | "heuristic"
    FORM_VARIANT: str = "basic"  # "basic" | "detailed"
    ENTIRE_VENUE_SPACES: str = "hele lokalet"
    AUTO_CONFIRM_HOURS: float = 8.0
    DEFAULT_DURATION_HOURS: float = 4.0
    MAX_DURATION_HOURS: float = 168.0
    CONFLICT_REQUIRES_SPACE_OVERLAP: bool = True

    STORE_PROVIDER: str = "memory"  # "memory" | "json"
    BOOKING_STORE_PATH: str = "./data/bookings.json"

    EMAIL_PROVIDER: str = "mock"  # "mock" | "plunk"
    PLUNK_API_TOKEN: str | None = None
    PLUNK_API_URL: str = "https://api.useplunk.com/v1/send"

    BOARD_TO_ADDRESS: str = ""
    DEFAULT_FROM_ADDRESS: str | None = None
    BOOKING_CC: str = ""
    BOOKING_BCC: str = ""
    BOOKING_REPLY_TO: str | None = None
    SEND_REQUESTER_RECEIPT: bool = True

    PUBLIC_BASE_URL: str | None = None
    ALLOW_ORIGIN: str = "*"


settings = Settings()
