"""Configuration schema and validation."""

from typing import Dict, Any, List, Mapping, Optional, Sequence, Union
from dataclasses import dataclass, field, fields, asdict
import math
import numbers
import yaml

from ..core.errors import InvalidConfig

INIT_METHODS = ("kmpp", "rand")
DISPLAY_LEVELS = ("off", "final", "iter")
DEGENERATE_POLICIES = ("reseed", "raise")

_ALIASES = {"verbosity": "display"}


@dataclass(frozen=True)
class KMedoidOptions:
    """
    Options controlling a k-medoid run.

    Args:
        maxiter: Maximum number of medoid updates.
        tolfun: Convergence threshold on the change of the objective.
        init: Seeding strategy when only K is given ("kmpp" or "rand").
        display: Progress reporting level ("off", "final" or "iter").
        seed: Seed for the default generator when none is injected.
        on_degenerate: What to do when a cluster loses all its members.
    """
    maxiter: int = 200
    tolfun: float = 1.0e-8
    init: str = "kmpp"
    display: str = "off"
    seed: Optional[int] = None
    on_degenerate: str = "reseed"

    def __post_init__(self):
        errors = _check_option_values(self)
        if errors:
            raise InvalidConfig("; ".join(errors))

    def replace(self, **overrides) -> "KMedoidOptions":
        return parse_options(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _check_option_values(opts: KMedoidOptions) -> List[str]:
    errors = []
    if not _is_int(opts.maxiter) or opts.maxiter < 0:
        errors.append(f"maxiter should be a non-negative integer, got {opts.maxiter!r}")
    if (
        isinstance(opts.tolfun, bool)
        or not isinstance(opts.tolfun, numbers.Real)
        or not math.isfinite(opts.tolfun)
        or opts.tolfun < 0
    ):
        errors.append(f"tolfun should be a non-negative real number, got {opts.tolfun!r}")
    if opts.init not in INIT_METHODS:
        errors.append(f"Invalid value for the option init: {opts.init!r} (expected one of {INIT_METHODS})")
    if opts.display not in DISPLAY_LEVELS:
        errors.append(f"Invalid value for the option display: {opts.display!r} (expected one of {DISPLAY_LEVELS})")
    if opts.seed is not None and not _is_int(opts.seed):
        errors.append(f"seed should be an integer, got {opts.seed!r}")
    if opts.on_degenerate not in DEGENERATE_POLICIES:
        errors.append(f"on_degenerate should be one of {DEGENERATE_POLICIES}, got {opts.on_degenerate!r}")
    return errors


def parse_options(
    options: Union[None, KMedoidOptions, Mapping[str, Any]] = None,
    **overrides
) -> KMedoidOptions:
    """
    Build a KMedoidOptions from a loose property bag.

    Option names are case-insensitive and ``verbosity`` is accepted as an
    alias of ``display``. Keyword overrides win over ``options``.

    Raises:
        InvalidConfig: On unknown option names or invalid values.
    """
    if isinstance(options, KMedoidOptions):
        values = options.to_dict()
    else:
        values = {}
        for key, value in dict(options or {}).items():
            values[_canonical_name(key)] = value

    for key, value in overrides.items():
        values[_canonical_name(key)] = value

    # YAML 1.1 reads a bare `off` as False
    if values.get("display") is False:
        values["display"] = "off"

    for key in ("display", "init", "on_degenerate"):
        if isinstance(values.get(key), str):
            values[key] = values[key].lower()

    # YAML reads "1e-8" as a string
    if isinstance(values.get("tolfun"), str):
        try:
            values["tolfun"] = float(values["tolfun"])
        except ValueError:
            raise InvalidConfig(f"tolfun should be a non-negative real number, got {values['tolfun']!r}") from None

    return KMedoidOptions(**values)


def _canonical_name(key: str) -> str:
    name = str(key).lower()
    name = _ALIASES.get(name, name)
    known = {f.name for f in fields(KMedoidOptions)}
    if name not in known:
        raise InvalidConfig(f"Unknown option '{key}'. Recognized options: {sorted(known)}")
    return name


@dataclass
class RunConfig:
    """A file-driven run: which matrix to cluster and how."""
    name: str
    matrix: str
    k: Optional[int] = None
    seeds: Optional[Sequence[int]] = None
    labels: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)


def load_config(path: str) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Validate a run configuration, return list of errors."""
    errors = []

    if not isinstance(config, dict):
        return ["Configuration should be a mapping"]

    if "matrix" not in config:
        errors.append("Missing 'matrix' (path to the cost matrix)")

    has_k = config.get("k") is not None
    has_seeds = config.get("seeds") is not None
    if has_k == has_seeds:
        errors.append("Exactly one of 'k' or 'seeds' must be given")

    options = config.get("options", {})
    if not isinstance(options, dict):
        errors.append("'options' should be a mapping")
    else:
        try:
            parse_options(options)
        except InvalidConfig as e:
            errors.append(str(e))

    return errors


def to_run_config(config: Dict[str, Any]) -> RunConfig:
    """Convert a validated configuration dict into a RunConfig."""
    return RunConfig(
        name=config.get("name", "unnamed"),
        matrix=config["matrix"],
        k=config.get("k"),
        seeds=config.get("seeds"),
        labels=config.get("labels"),
        options=dict(config.get("options") or {}),
    )
