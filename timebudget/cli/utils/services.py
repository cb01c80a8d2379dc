"""Backend wiring shared by CLI commands."""

from timebudget.config.settings import TimeBudgetConfig
from timebudget.readers.reference_data_reader import ReferenceDataReader
from timebudget.services.api_client import TimeTrackingApiClient


def create_api_client(settings: TimeBudgetConfig) -> TimeTrackingApiClient:
    return TimeTrackingApiClient(
        base_url=settings.api_base_url,
        token=settings.api_token,
        timeout=settings.request_timeout,
    )


def create_reference_reader(settings: TimeBudgetConfig) -> ReferenceDataReader:
    return ReferenceDataReader(create_api_client(settings))
