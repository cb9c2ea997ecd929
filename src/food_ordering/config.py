"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_username: str = ""
    smtp_password: str = ""
    mail_sender_name: str = "Spoke Restaurant"
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    osrm_url: str = "http://router.project-osrm.org/route/v1/driving"
    geocoder_user_agent: str = "SpokeRestaurant/1.0 (support@spoke.com)"
    origin_lat: float = 9.4650
    origin_lng: float = 77.7978
    service_region: str = "Tamil Nadu"
    service_country: str = "India"
    delivery_rate_per_km: float = 42.5
    minimum_delivery_fee: float = 50.0
    road_circuity_factor: float = 1.4
    reachability_endpoints: str = "https://www.google.com,https://cloudflare.com"
    reachability_timeout_seconds: float = 3.0
    upstream_timeout_seconds: float = 5.0
    notification_queue_path: str = "data/queued_emails.jsonl"
    locations_dataset_path: str | None = None
    cors_origins: str = "http://localhost:4200"
    admin_emails: str = ""
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_endpoints(raw: str | None) -> list[str]:
    """Parse a comma-separated setting such as a URL or email list, dropping blanks."""
    if raw is None:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]
