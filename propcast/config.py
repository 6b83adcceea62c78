from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PROPCAST_"}

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Projection defaults applied at the API/CLI boundary; the engine itself
    # only sees the values carried on ProjectionAssumptions.
    income_indexation_rate: Decimal = Decimal("2.5")  # CPI on investor incomes
    expense_inflation_rate: Decimal = Decimal("2.5")
    default_max_year_span: int = 25


settings = Settings()
