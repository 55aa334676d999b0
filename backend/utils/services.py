import os

from config import Config
from jobs import JobService, JobStatusService, LocationDisclosureService
from matching import NearbyMatcher
from notifier import NotificationDispatcher, WebPushNotifier
from ratings import RatingAggregator
from shared import PostgreSQLDatabase
from workers import WorkerNotificationService, WorkerService


def build_db_connection_string() -> str:
    """
    Build PostgreSQL connection string from environment variables.

    Checks DATABASE_URL first, then falls back to individual POSTGRES_* variables.

    Returns:
        PostgreSQL connection string
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    db = os.getenv("POSTGRES_DB", "marketplace_db")
    ssl_mode = os.getenv("POSTGRES_SSL_MODE", "")

    conn_str = f"postgresql://{user}:{password}@{host}:{port}/{db}"
    if ssl_mode:
        conn_str += f"?sslmode={ssl_mode}"
    return conn_str


def get_database() -> PostgreSQLDatabase:
    return PostgreSQLDatabase(connection_string=build_db_connection_string())


def get_push_notifier() -> WebPushNotifier:
    """
    Build the Web Push notifier from configuration.

    Returns:
        WebPushNotifier instance (disabled when VAPID keys are missing)
    """
    return WebPushNotifier(
        vapid_private_key=Config.VAPID_PRIVATE_KEY,
        vapid_public_key=Config.VAPID_PUBLIC_KEY,
        claim_email=Config.VAPID_CLAIM_EMAIL,
    )


def get_notification_dispatcher() -> NotificationDispatcher:
    """
    Get NotificationDispatcher with database connection and push notifier.

    Returns:
        NotificationDispatcher instance
    """
    database = get_database()
    return NotificationDispatcher(
        database=database,
        notifier=get_push_notifier(),
        matcher=NearbyMatcher(database),
        max_workers=Config.DISPATCH_MAX_WORKERS,
    )


def get_job_service() -> JobService:
    """
    Get JobService instance wired to the notification dispatcher.

    Returns:
        JobService instance
    """
    return JobService(database=get_database(), dispatcher=get_notification_dispatcher())


def get_job_status_service() -> JobStatusService:
    return JobStatusService(database=get_database())


def get_location_disclosure_service() -> LocationDisclosureService:
    return LocationDisclosureService(database=get_database())


def get_rating_aggregator() -> RatingAggregator:
    return RatingAggregator(database=get_database())


def get_worker_service() -> WorkerService:
    """
    Get WorkerService instance with database connection.

    Returns:
        WorkerService instance
    """
    database = get_database()
    return WorkerService(
        database=database,
        matcher=NearbyMatcher(database),
        default_service_radius=Config.DEFAULT_SERVICE_RADIUS_KM,
    )


def get_worker_notification_service() -> WorkerNotificationService:
    return WorkerNotificationService(database=get_database())
