# src/kubestats/core/config.py

import logging
import os

from dotenv import load_dotenv

from kubestats import __version__
from kubestats.utils.date_utils import parse_duration

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)


def _env_bool(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() in ("true", "1", "t", "y", "yes")


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    def __init__(self):
        # --- Kubelet credentials ---
        self.KUBELET_BEARER_TOKEN = self._get_secret("KUBELET_BEARER_TOKEN")

    @staticmethod
    def _get_secret(key: str, default: str = None) -> str:
        """
        Retrieves a secret from a file (Docker secret/volume) or falls back to environment variable.

        Raises:
            PermissionError: If the secret file exists but cannot be read due to permissions.
            IOError: If the secret file exists but cannot be read due to I/O errors.
        """
        secret_file = f"/etc/kubestats/secrets/{key}"
        if os.path.exists(secret_file):
            try:
                with open(secret_file, "r") as f:
                    value = f.read().strip()
                    logging.getLogger(__name__).debug(f"Loaded secret '{key}' from {secret_file}")
                    return value
            except PermissionError as e:
                raise PermissionError(
                    f"Secret file '{secret_file}' exists but cannot be read due to permission denied. "
                    f"Please check file permissions or run with appropriate privileges."
                ) from e
            except (IOError, OSError) as e:
                raise IOError(
                    f"Secret file '{secret_file}' exists but cannot be read: {e}. "
                    f"Please check the file integrity and system resources."
                ) from e
        return os.getenv(key, default)

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Kubernetes API variables ---
    # Path of the kubeconfig used outside a cluster; empty means the default location.
    KUBECONFIG = os.getenv("KUBECONFIG", "")

    # --- Kubelet variables ---
    KUBELET_PORT = int(os.getenv("KUBELET_PORT", "10250"))
    KUBELET_SCHEME = os.getenv("KUBELET_SCHEME", "https").lower()
    # Kubelet serving certificates are self-signed on most clusters.
    KUBELET_VERIFY_CERTS = _env_bool("KUBELET_VERIFY_CERTS", "False")

    # --- HTTP client variables ---
    DEFAULT_TIMEOUT_CONNECT = float(os.getenv("DEFAULT_TIMEOUT_CONNECT", "5"))
    DEFAULT_TIMEOUT_READ = float(os.getenv("DEFAULT_TIMEOUT_READ", "30"))
    USER_AGENT = os.getenv("USER_AGENT", f"kubestats/{__version__}")

    # --- Scrape variables ---
    # Interval between two scrape cycles; also the width of each scrape window.
    SCRAPE_INTERVAL = os.getenv("SCRAPE_INTERVAL", "1m")
    OUTPUT_PATH = os.getenv("OUTPUT_PATH", "kubestats-batches.json")

    # --- Telemetry variables ---
    # Empty disables the OTLP exporter; latencies are then only kept in-process.
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "")

    def validate_instance(self):
        if self.KUBELET_SCHEME not in ("http", "https"):
            raise ValueError("KUBELET_SCHEME must be 'http' or 'https'")
        if not 0 < self.KUBELET_PORT < 65536:
            raise ValueError("KUBELET_PORT must be between 1 and 65535")
        try:
            interval = parse_duration(self.SCRAPE_INTERVAL)
        except ValueError:
            raise ValueError("SCRAPE_INTERVAL format is invalid. Use 's', 'm', or 'h'.") from None
        if interval.total_seconds() <= 0:
            raise ValueError("SCRAPE_INTERVAL must be greater than zero.")
        if self.KUBELET_SCHEME == "https" and not self.KUBELET_BEARER_TOKEN:
            logging.warning("KUBELET_BEARER_TOKEN is not set; kubelet requests will be unauthenticated.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
