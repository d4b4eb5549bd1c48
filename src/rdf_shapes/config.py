"""
Validator configuration for rdf-shapes.

Provides:
- ValidatorConfig with dict round-tripping
- Environment overrides (RDF_SHAPES_* variables)
- Configuration validation
- Identity generator selection
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from rdf_shapes.terms import (
    IdentityGenerator,
    SequentialIdentityGenerator,
    UUIDIdentityGenerator,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "RDF_SHAPES_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class IdentityScheme(Enum):
    """How fresh report/result identities are minted."""
    UUID = "uuid"              # Random uuid4 blank nodes
    SEQUENTIAL = "sequential"  # Deterministic counter, for tests and diffs


class ConfigValidationError(ValueError):
    """Raised when validator configuration is invalid."""
    pass


@dataclass
class ValidatorConfig:
    """Settings for the shape-evaluation driver."""
    identity_scheme: IdentityScheme = IdentityScheme.UUID
    identity_prefix: str = "bnode:r"
    max_results: int = 0  # 0 = unlimited
    include_deactivated: bool = False
    log_level: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identity_scheme": self.identity_scheme.value,
            "identity_prefix": self.identity_prefix,
            "max_results": self.max_results,
            "include_deactivated": self.include_deactivated,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidatorConfig":
        scheme_str = data.get("identity_scheme", "uuid")
        try:
            scheme = IdentityScheme(scheme_str)
        except ValueError:
            raise ConfigValidationError(f"Invalid identity_scheme: {scheme_str}")

        config = cls(
            identity_scheme=scheme,
            identity_prefix=data.get("identity_prefix", "bnode:r"),
            max_results=int(data.get("max_results", 0)),
            include_deactivated=bool(data.get("include_deactivated", False)),
            log_level=data.get("log_level"),
        )
        config.validate_or_raise()
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ValidatorConfig":
        """
        Build a config from RDF_SHAPES_* environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}

        if f"{ENV_PREFIX}IDENTITY_SCHEME" in env:
            data["identity_scheme"] = env[f"{ENV_PREFIX}IDENTITY_SCHEME"].strip().lower()
        if f"{ENV_PREFIX}IDENTITY_PREFIX" in env:
            data["identity_prefix"] = env[f"{ENV_PREFIX}IDENTITY_PREFIX"]
        if f"{ENV_PREFIX}MAX_RESULTS" in env:
            raw = env[f"{ENV_PREFIX}MAX_RESULTS"]
            try:
                data["max_results"] = int(raw)
            except ValueError:
                raise ConfigValidationError(f"Invalid {ENV_PREFIX}MAX_RESULTS: {raw!r}")
        if f"{ENV_PREFIX}INCLUDE_DEACTIVATED" in env:
            data["include_deactivated"] = (
                env[f"{ENV_PREFIX}INCLUDE_DEACTIVATED"].strip().lower() in ("1", "true", "yes")
            )
        if f"{ENV_PREFIX}LOG_LEVEL" in env:
            data["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"].strip().upper()

        return cls.from_dict(data)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns list of error messages (empty if valid).
        """
        errors = []

        if self.max_results < 0:
            errors.append("max_results must be 0 (unlimited) or positive")

        if not self.identity_prefix:
            errors.append("identity_prefix cannot be empty")

        if self.log_level is not None and self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"Invalid log_level: {self.log_level}")

        return errors

    def validate_or_raise(self) -> None:
        """Validate configuration, raising on errors."""
        errors = self.validate()
        if errors:
            raise ConfigValidationError("; ".join(errors))

    def make_identity_generator(self) -> IdentityGenerator:
        """Build the identity generator this config describes."""
        if self.identity_scheme == IdentityScheme.SEQUENTIAL:
            return SequentialIdentityGenerator(self.identity_prefix)
        return UUIDIdentityGenerator()

    def apply_log_level(self) -> None:
        """Set the package logger level, if one is configured."""
        if self.log_level is not None:
            logging.getLogger("rdf_shapes").setLevel(self.log_level.upper())
            logger.debug(f"rdf_shapes log level set to {self.log_level.upper()}")
