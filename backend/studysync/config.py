from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Group Assignment Rules
    target_groups: list[int] = Field(default=[2, 3, 4, 5], alias="TARGET_GROUPS")
    group_max_size: int = Field(default=13, alias="GROUP_MAX_SIZE")
    max_total_students: int = Field(default=50, alias="MAX_TOTAL_STUDENTS")
    admin_passcode: str = Field(default="1234", alias="ADMIN_PASSCODE")
    whatsapp_links: dict[int, str] = Field(
        default={
            2: "https://chat.whatsapp.com/GSp27Rpgqp0EeTZjADbffY",
            3: "https://chat.whatsapp.com/FeqbbuRkHnE0WUZP7rJwtP",
            4: "https://chat.whatsapp.com/IvsghT87HQh9J7yiy10NLF",
            5: "https://chat.whatsapp.com/GIB1b754vsKKCrWdUfsbbb",
        },
        alias="WHATSAPP_LINKS",
    )

    # Registration Flow
    submit_delay_ms: int = Field(default=800, alias="SUBMIT_DELAY_MS")

    # Export Configuration
    export_timezone: str = Field(default="UTC", alias="EXPORT_TIMEZONE")
    export_quote_fields: bool = Field(default=False, alias="EXPORT_QUOTE_FIELDS")
    export_missing_id_placeholder: str = Field(default="N/A", alias="EXPORT_MISSING_ID_PLACEHOLDER")

    # Storage Configuration
    storage_backend: str = Field(default="mongo", alias="STORAGE_BACKEND")
    storage_key: str = Field(default="group_generator_students", alias="STORAGE_KEY")
    mongodb_url: str = Field(default="mongodb://localhost:27017", alias="MONGODB_URL")
    mongodb_db_name: str = Field(default="study_sync", alias="MONGODB_DB_NAME")
    mongodb_server_selection_timeout_ms: int = Field(
        default=5000, alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS"
    )

    # Application Settings
    app_name: str = Field(default="Study Sync", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")

    # CORS Configuration
    allowed_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000", alias="ALLOWED_ORIGINS"
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


settings = Settings()
