from pydantic_settings import BaseSettings
import os


class Settings(BaseSettings):
    PROJECT_NAME: str = "Facturatie & BTW"

    # ========================
    # DATABASE
    # ========================
    DATABASE_URL: str = "sqlite:///./data/fiscaal.db"

    # ========================
    # APP MODE
    # ========================
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # ========================
    # FACTURATIE
    # ========================
    INVOICE_PREFIX: str = "FV"
    CURRENCY: str = "EUR"
    DEFAULT_PAYMENT_TERM_DAYS: int = 14
    REVERSE_CHARGE_NOTE: str = "BTW verlegd (reverse charge)"

    # Retries when two writers race on a new counter row
    COUNTER_MAX_RETRIES: int = 3

    # ========================
    # BTW AANGIFTE
    # ========================
    BTW_HIGH_RATE: float = 21.0
    BTW_LOW_RATE: float = 9.0

    # Tolerance bands on the effective rate (vat / net * 100)
    BTW_HIGH_BAND_MIN: float = 20.0
    BTW_HIGH_BAND_MAX: float = 22.0
    BTW_LOW_BAND_MIN: float = 8.0
    BTW_LOW_BAND_MAX: float = 10.0
    BTW_ZERO_BAND_MAX: float = 1.0

    # "nearest" | "separate"
    BTW_UNCLASSIFIED_POLICY: str = "nearest"

    # Private use of a business car, VAT per private km
    PRIVATE_USE_VAT_PER_KM: float = 0.21

    # ========================
    # KILOMETERS
    # ========================
    KM_RATE_CAR_BUSINESS: float = 0.23
    KM_RATE_CAR_COMMUTING: float = 0.19
    KM_RATE_BIKE: float = 0.27
    KM_RATE_MOTORCYCLE: float = 0.21

    class Config:
        env_file = ".env" if os.getenv("FISCAAL_NO_ENV_FILE") is None else None


settings = Settings()
