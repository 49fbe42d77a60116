import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

DEFAULT_BEGIN = 100
DEFAULT_END = 8192
DEFAULT_TOLERANCE = 0.08
MIN_TOLERANCE = 0.01

DEFAULT_DPRS = (1, 2, 3, 4, 5)
DPR_QUALITIES = {1: 75, 2: 50, 3: 35, 4: 23, 5: 20}


@dataclass
class SrcsetOptions:
    widths: Optional[List[int]] = None
    begin: int = DEFAULT_BEGIN
    end: int = DEFAULT_END
    tolerance: float = DEFAULT_TOLERANCE
    variable_quality: bool = True
    dprs: Tuple[int, ...] = field(default=DEFAULT_DPRS)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def validate_widths(widths: List[int]) -> List[int]:
    if not widths:
        raise ValueError("widths must contain at least one value")
    for w in widths:
        if not isinstance(w, int) or isinstance(w, bool) or w <= 0:
            raise ValueError(f"Invalid width {w!r}: widths must be positive integers")
    return list(widths)


def target_widths(begin: int = DEFAULT_BEGIN, end: int = DEFAULT_END, tolerance: float = DEFAULT_TOLERANCE) -> List[int]:
    """
    Widths from begin to end where each step grows by 2 * tolerance.
    The last entry is always end.
    """
    if begin <= 0 or end <= 0:
        raise ValueError(f"Invalid width range {begin}-{end}: bounds must be positive")
    if begin > end:
        raise ValueError(f"Invalid width range {begin}-{end}: begin exceeds end")
    if tolerance < MIN_TOLERANCE:
        raise ValueError(f"Invalid tolerance {tolerance}: minimum is {MIN_TOLERANCE}")
    if begin == end:
        return [begin]

    widths = []
    prev = float(begin)
    while prev <= end:
        widths.append(_round_half_up(prev))
        prev *= 1 + tolerance * 2
    if widths[-1] < end:
        widths.append(end)
    return widths


def is_fixed(params: Dict[str, List[str]]) -> bool:
    # a known width, or a height with an aspect ratio, pins the rendered size
    if params.get("w"):
        return True
    return bool(params.get("h")) and bool(params.get("ar"))


def build_fixed_srcset(create_url: Callable, path: str, params: Dict[str, List[str]], options: SrcsetOptions) -> str:
    entries = []
    for dpr in options.dprs:
        p = dict(params)
        p["dpr"] = [str(dpr)]
        if options.variable_quality and "q" not in params and dpr in DPR_QUALITIES:
            p["q"] = [str(DPR_QUALITIES[dpr])]
        entries.append(f"{create_url(path, p)} {dpr}x")
    return ",\n".join(entries)


def build_fluid_srcset(create_url: Callable, path: str, params: Dict[str, List[str]], options: SrcsetOptions) -> str:
    if options.widths is not None:
        widths = validate_widths(options.widths)
    else:
        widths = target_widths(options.begin, options.end, options.tolerance)
    entries = []
    for width in widths:
        p = dict(params)
        p["w"] = [str(width)]
        entries.append(f"{create_url(path, p)} {width}w")
    return ",\n".join(entries)


def build_srcset(create_url: Callable, path: str, params: Dict[str, List[str]], options: SrcsetOptions) -> str:
    if is_fixed(params):
        return build_fixed_srcset(create_url, path, params, options)
    return build_fluid_srcset(create_url, path, params, options)
