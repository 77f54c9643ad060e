"""TPM context configuration, TCTI string validation and an in-memory context."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import ErrorCategory, TpmError
from .logger import Logger
from .ports import Observer, Provider

TPM2_RC_SUCCESS = 0x000
TPM2_RC_INITIALIZE = 0x100

_TCTI_INVALID_MESSAGE = "TCTI configuration must use name:args format"
_KNOWN_TCTI_NAMES = frozenset({"device", "mssim", "swtpm", "tabrmd"})
# Matches the C locale's isspace(): space, \t, \n, \v, \f, \r.
_WHITESPACE = " \t\n\v\f\r"


class StartupMode(Enum):
    """How the TPM is started when a context is created."""

    CLEAR = "clear"
    STATE = "state"
    SKIP = "skip"


@dataclass(frozen=True)
class TctiStringConfig:
    """TCTI configuration in ``name:args`` form, e.g. ``mssim:host=localhost``."""

    config: str = ""


@dataclass
class TpmContextConfig:
    """Everything needed to create a TPM context."""

    tcti: TctiStringConfig = field(default_factory=TctiStringConfig)
    startup: StartupMode = StartupMode.CLEAR
    log: Logger | None = None


def _config_text(config: TctiStringConfig | str) -> str:
    if isinstance(config, TctiStringConfig):
        return config.config
    if isinstance(config, str):
        return config
    raise TpmError(ErrorCategory.INPUT_ERROR, _TCTI_INVALID_MESSAGE)


def validate_tcti_config(config: TctiStringConfig | str) -> str:
    """Return the validated TCTI string or raise an input error.

    The string must be non-empty, carry no surrounding whitespace and have a
    non-empty name before the first colon.
    """
    text = _config_text(config)
    trimmed = text.strip(_WHITESPACE)
    if not trimmed or len(trimmed) != len(text):
        raise TpmError(ErrorCategory.INPUT_ERROR, _TCTI_INVALID_MESSAGE)
    colon = trimmed.find(":")
    if colon <= 0:
        raise TpmError(ErrorCategory.INPUT_ERROR, _TCTI_INVALID_MESSAGE)
    return trimmed


def tcti_name(config: TctiStringConfig | str) -> str:
    """Return the TCTI name, the part before the first colon of a valid config."""
    validated = validate_tcti_config(config)
    return validated.partition(":")[0]


def sanitized_tcti_name(config: TctiStringConfig | str) -> str:
    """Return a name that is safe to log.

    Known TCTI names are returned as is, other valid names as ``<custom>``,
    and an empty string for a malformed configuration.
    """
    try:
        name = tcti_name(config)
    except TpmError:
        return ""
    return name if name in _KNOWN_TCTI_NAMES else "<custom>"


def is_startup_already_initialized(rc: int) -> bool:
    """Return True if a startup return code means the TPM was already started."""
    return rc == TPM2_RC_INITIALIZE


def startup_result_field(rc: int) -> str:
    """Return the log field value describing a startup return code."""
    return "already_initialized" if is_startup_already_initialized(rc) else "ok"


def _validate_startup(mode: object) -> StartupMode:
    if not isinstance(mode, StartupMode):
        raise TpmError(ErrorCategory.INPUT_ERROR, "TPM startup mode is invalid")
    return mode


class FakeTpmContext:
    """Context that validates configuration like a real one but has no backend."""

    def __init__(self, config: TpmContextConfig) -> None:
        self._config = config

    @classmethod
    def create(cls, config: TpmContextConfig) -> FakeTpmContext:
        """Validate ``config`` and return a context; raise TpmError on bad input."""
        _validate_startup(config.startup)
        if not isinstance(config.tcti, TctiStringConfig):
            raise TpmError(ErrorCategory.INPUT_ERROR, _TCTI_INVALID_MESSAGE)
        validate_tcti_config(config.tcti)
        return cls(config)

    @classmethod
    def from_string(
        cls,
        tcti_config: str,
        startup: StartupMode = StartupMode.CLEAR,
        log: Logger | None = None,
    ) -> FakeTpmContext:
        """Build a config from a TCTI string and create a context from it."""
        return cls.create(
            TpmContextConfig(tcti=TctiStringConfig(tcti_config), startup=startup, log=log)
        )

    @property
    def last_config(self) -> TpmContextConfig:
        """The configuration this context was created from."""
        return self._config

    def create_pcr_provider(self, observer: Observer | None = None) -> Provider:
        """Always fail: the fake context has no usable backend."""
        raise TpmError(
            ErrorCategory.RESOURCE_ERROR, "TPM context does not contain a usable backend"
        )