"""CLI command modules.

- rollout: deploy (default action) and check
"""

from .rollout import check, deploy

__all__ = ["deploy", "check"]
