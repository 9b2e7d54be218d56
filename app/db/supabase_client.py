"""
Supabase client for the catalog tables.
Provides a singleton instance shared by the repository layer.
"""
from supabase import create_client, Client
import logging
import socket
from urllib.parse import urlparse
import time
from app.config import settings

logger = logging.getLogger(__name__)

MAX_CONNECT_ATTEMPTS = 2

class SupabaseClientManager:
    """
    Manager for the Supabase client with singleton pattern.
    """
    _instance = None

    def __init__(self):
        self.client = None
        self.enabled = False

        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            logger.warning("SUPABASE_URL or SUPABASE_KEY not set, catalog storage is disabled")
            return

        # Resolve the host first so a DNS problem gets a readable message
        hostname = urlparse(settings.SUPABASE_URL).netloc
        try:
            socket.gethostbyname(hostname)
        except socket.gaierror as dns_error:
            logger.error(f"DNS resolution failed for Supabase URL ({hostname}): {dns_error}")
            return

        last_error = None
        for attempt in range(1, MAX_CONNECT_ATTEMPTS + 1):
            try:
                self.client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
                self.enabled = True
                logger.info("Successfully initialized Supabase client")
                return
            except Exception as e:
                last_error = e
                if attempt < MAX_CONNECT_ATTEMPTS:
                    logger.warning(f"Supabase client creation failed (attempt {attempt}), retrying...")
                    time.sleep(1)

        logger.error(f"Failed to initialize Supabase client: {last_error}")

    @classmethod
    def get_instance(cls) -> 'SupabaseClientManager':
        """Get the singleton instance of SupabaseClientManager"""
        if cls._instance is None:
            cls._instance = SupabaseClientManager()
        return cls._instance

    @classmethod
    def is_connected(cls) -> bool:
        """Whether a client has been created, without triggering a connection attempt"""
        return cls._instance is not None and cls._instance.enabled

    def get_client(self) -> Client:
        """Get the Supabase client instance"""
        if not self.enabled or self.client is None:
            raise ValueError("Supabase client is not initialized or connection failed")
        return self.client


def get_supabase_client() -> Client:
    """
    Returns the shared Supabase client.

    Raises:
        ValueError: If the Supabase client is not available or not initialized
    """
    try:
        return SupabaseClientManager.get_instance().get_client()
    except ValueError as e:
        logger.error(f"Supabase client unavailable: {e}")
        raise
