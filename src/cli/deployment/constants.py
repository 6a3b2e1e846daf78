"""Shared rollout constants."""

from pathlib import Path

DEFAULT_ENVIRONMENTS_FILE = Path("config.json")
DEFAULT_SERVICES_FILE = Path("services.json")
DEFAULT_LOG_DIR = Path("logs")

# Seconds to wait for a single `kubectl set image`; 0 disables the limit
DEFAULT_UPDATE_TIMEOUT = 300.0

DEPLOY_LOG_NAME = "deploy_{stamp}.log"
DEPLOY_LOG_FORMAT = "[{time:YYYY-MM-DD HH:mm:ss}] {level}: {message}"

CONFIRM_ANSWERS = ("y", "yes")

# Environment variables backing the CLI options
ENV_CONFIG_FILE = "KUBE_ROLLOUT_CONFIG"
ENV_SERVICES_FILE = "KUBE_ROLLOUT_SERVICES"
ENV_LOG_DIR = "KUBE_ROLLOUT_LOG_DIR"
ENV_TIMEOUT = "KUBE_ROLLOUT_TIMEOUT"
