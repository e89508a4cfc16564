"""Runtime configuration for decisionmatrix.

Settings come from environment variables with sensible defaults:
    DECISIONMATRIX_DEFAULT_RULE: rule selected in a new workspace (default: "maximin")
    DECISIONMATRIX_HURWICZ_LAMBDA: initial Hurwicz lambda (default: 0.5)
    DECISIONMATRIX_LOG_LEVEL: logging level name (default: "WARNING")

Invalid values fall back to the defaults with a warning rather than
preventing the front ends from starting.
"""

import logging
import os

from decisionmatrix.errors import DecisionMatrixError
from decisionmatrix.models.rules import DEFAULT_HURWICZ_LAMBDA, RuleType, coerce_lambda, parse_rule_type

logger = logging.getLogger(__name__)

# Default configuration (can be overridden via environment variables)
DEFAULT_RULE = RuleType.MAXIMIN
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_default_rule() -> RuleType:
    """Get configured initial rule from environment.

    Returns:
        RuleType enum value
    """
    raw = os.environ.get("DECISIONMATRIX_DEFAULT_RULE")
    if not raw:
        return DEFAULT_RULE
    try:
        return parse_rule_type(raw)
    except DecisionMatrixError:
        logger.warning(f"Ignoring DECISIONMATRIX_DEFAULT_RULE={raw!r}; using {DEFAULT_RULE.value}")
        return DEFAULT_RULE


def get_default_lambda() -> float:
    """Get configured initial Hurwicz lambda from environment."""
    raw = os.environ.get("DECISIONMATRIX_HURWICZ_LAMBDA")
    if not raw:
        return DEFAULT_HURWICZ_LAMBDA
    try:
        return coerce_lambda(raw)
    except DecisionMatrixError:
        logger.warning(f"Ignoring DECISIONMATRIX_HURWICZ_LAMBDA={raw!r}; using {DEFAULT_HURWICZ_LAMBDA}")
        return DEFAULT_HURWICZ_LAMBDA


def get_log_level() -> int:
    """Get configured logging level from environment."""
    name = os.environ.get("DECISIONMATRIX_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.getLevelName(DEFAULT_LOG_LEVEL)
    return level


def configure_logging() -> None:
    """Configure root logging for a front-end entry point."""
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)
