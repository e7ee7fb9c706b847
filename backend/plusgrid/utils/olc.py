from __future__ import annotations

"""Stdlib-only Open Location Code ("plus code") encode/decode.

Codes look like ``8FVC9G8F+6X``: up to ten interleaved latitude/longitude
digits (the pair phase), a separator after the eighth digit, then optional
grid digits that split the last pair cell into 4x5 sub-cells. Codes coarser
than eight digits are right-padded (``7FG49Q00+``).

Every public function takes an optional ``fmt`` so alternate separator or
alphabet schemes can be swapped in without touching the math.
"""

import dataclasses
import math
import warnings

from plusgrid.utils.geo import haversine_m

CODE_ALPHABET = "23456789CFGHJMPQRVWX"
SEPARATOR = "+"
SEPARATOR_POSITION = 8
PADDING_CHARACTER = "0"

ENCODING_BASE = len(CODE_ALPHABET)
LATITUDE_MAX = 90
LONGITUDE_MAX = 180

# Place value, in degrees, of each lat/lng pair.
PAIR_CODE_LENGTH = 10
PAIR_RESOLUTIONS = (20.0, 1.0, 0.05, 0.0025, 0.000125)

GRID_COLUMNS = 4
GRID_ROWS = 5
GRID_SIZE_DEGREES = 0.000125

MIN_CODE_LENGTH = 4
MAX_CODE_LENGTH = 15
DEFAULT_CODE_LENGTH = 10


@dataclasses.dataclass(frozen=True, slots=True)
class CodeFormat:
    """Symbols and separator placement used to render codes."""

    alphabet: str = CODE_ALPHABET
    separator: str = SEPARATOR
    separator_position: int = SEPARATOR_POSITION
    padding_character: str = PADDING_CHARACTER

    def __post_init__(self) -> None:
        if len(self.alphabet) != ENCODING_BASE:
            raise ValueError(f"alphabet must have {ENCODING_BASE} symbols")
        if len(set(self.alphabet.upper())) != ENCODING_BASE:
            raise ValueError("alphabet symbols must be unique")
        if self.alphabet != self.alphabet.upper():
            raise ValueError("alphabet must be upper case")
        for name in ("separator", "padding_character"):
            ch = getattr(self, name)
            if len(ch) != 1:
                raise ValueError(f"{name} must be a single character")
            if ch.upper() in self.alphabet:
                raise ValueError(f"{name} {ch!r} collides with the alphabet")
        if self.separator == self.padding_character:
            raise ValueError("separator and padding_character must differ")
        if (
            self.separator_position % 2 == 1
            or not MIN_CODE_LENGTH <= self.separator_position <= PAIR_CODE_LENGTH
        ):
            raise ValueError(
                "separator_position must be even and between "
                f"{MIN_CODE_LENGTH} and {PAIR_CODE_LENGTH}"
            )


DEFAULT_FORMAT = CodeFormat()


@dataclasses.dataclass(frozen=True, slots=True)
class CodeArea:
    """Rectangle covered by a code, plus the number of digits it came from."""

    latitude_lo: float
    longitude_lo: float
    latitude_hi: float
    longitude_hi: float
    code_length: int

    @property
    def latitude_center(self) -> float:
        center = self.latitude_lo + (self.latitude_hi - self.latitude_lo) / 2.0
        return min(center, LATITUDE_MAX)

    @property
    def longitude_center(self) -> float:
        center = self.longitude_lo + (self.longitude_hi - self.longitude_lo) / 2.0
        return min(center, LONGITUDE_MAX)

    @property
    def center(self) -> tuple[float, float]:
        return self.latitude_center, self.longitude_center

    @property
    def northwest(self) -> tuple[float, float]:
        return self.latitude_hi, self.longitude_lo

    @property
    def northeast(self) -> tuple[float, float]:
        return self.latitude_hi, self.longitude_hi

    @property
    def southwest(self) -> tuple[float, float]:
        return self.latitude_lo, self.longitude_lo

    @property
    def southeast(self) -> tuple[float, float]:
        return self.latitude_lo, self.longitude_hi

    def bbox(self) -> tuple[float, float, float, float]:
        """Return (lat_min, lat_max, lon_min, lon_max)."""

        return self.latitude_lo, self.latitude_hi, self.longitude_lo, self.longitude_hi

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.latitude_lo <= latitude <= self.latitude_hi
            and self.longitude_lo <= longitude <= self.longitude_hi
        )


# Checks


def is_valid(code: str | None, *, fmt: CodeFormat = DEFAULT_FORMAT) -> bool:
    """Structural check only; says nothing about the decoded position."""

    if not code or len(code) == 1:
        return False

    sep = code.find(fmt.separator)
    if sep == -1 or code.count(fmt.separator) > 1:
        return False
    if sep > fmt.separator_position or sep % 2 == 1:
        return False

    pad = code.find(fmt.padding_character)
    if pad != -1:
        # Short codes cannot be padded, and padding never leads.
        if sep < fmt.separator_position or pad == 0:
            return False
        # One even-length block, directly before a trailing separator.
        rpad = code.rfind(fmt.padding_character) + 1
        block = code[pad:rpad]
        if len(block) % 2 == 1 or block.count(fmt.padding_character) != len(block):
            return False
        if rpad != sep or not code.endswith(fmt.separator):
            return False

    # Digits after the separator that still fall in the pair phase come in
    # lat/lng pairs; only grid digits may stand alone.
    after = len(code) - sep - 1
    if after < PAIR_CODE_LENGTH - fmt.separator_position and after % 2 == 1:
        return False

    for ch in code:
        if ch in (fmt.separator, fmt.padding_character):
            continue
        if ch.upper() not in fmt.alphabet:
            return False
    return True


def is_short(code: str | None, *, fmt: CodeFormat = DEFAULT_FORMAT) -> bool:
    if not is_valid(code, fmt=fmt):
        return False
    return code.find(fmt.separator) < fmt.separator_position


def is_full(code: str | None, *, fmt: CodeFormat = DEFAULT_FORMAT) -> bool:
    if not is_valid(code, fmt=fmt) or is_short(code, fmt=fmt):
        return False

    # First latitude digit must decode below 90 degrees.
    first_lat_value = fmt.alphabet.find(code[0].upper()) * ENCODING_BASE
    if first_lat_value >= LATITUDE_MAX * 2:
        return False
    if len(code) > 1:
        first_lng_value = fmt.alphabet.find(code[1].upper()) * ENCODING_BASE
        if first_lng_value >= LONGITUDE_MAX * 2:
            return False
    return True


def is_padded(code: str, *, fmt: CodeFormat = DEFAULT_FORMAT) -> bool:
    return fmt.padding_character in code


def contains(
    code: str,
    latitude: float,
    longitude: float,
    *,
    fmt: CodeFormat = DEFAULT_FORMAT,
) -> bool:
    if not is_full(code, fmt=fmt):
        return False
    return decode(code, fmt=fmt).contains(latitude, longitude)


# Encode


def clip_latitude(latitude: float) -> float:
    return min(float(LATITUDE_MAX), max(-float(LATITUDE_MAX), latitude))


def normalize_longitude(longitude: float) -> float:
    longitude = (longitude + LONGITUDE_MAX) % (2 * LONGITUDE_MAX) - LONGITUDE_MAX
    # The modulo can round up to exactly +180 for values a hair below -180.
    if longitude >= LONGITUDE_MAX:
        longitude -= 2 * LONGITUDE_MAX
    return longitude


def compute_latitude_precision(code_length: int) -> float:
    """Height in degrees of a cell at ``code_length`` digits."""

    if code_length <= PAIR_CODE_LENGTH:
        return float(ENCODING_BASE ** (2 - code_length // 2))
    return ENCODING_BASE**-3 / GRID_ROWS ** (code_length - PAIR_CODE_LENGTH)


def _check_code_length(code_length: int) -> None:
    if (
        code_length < MIN_CODE_LENGTH
        or code_length > MAX_CODE_LENGTH
        or (code_length < PAIR_CODE_LENGTH and code_length % 2 == 1)
    ):
        raise ValueError(f"Invalid Open Location Code length: {code_length}")


def _digit(value: float, place_value: float, limit: int) -> int:
    # Float drift can leave a remainder a hair outside [0, limit * place_value).
    return min(max(int(math.floor(value / place_value)), 0), limit - 1)


def encode(
    latitude: float,
    longitude: float,
    code_length: int = DEFAULT_CODE_LENGTH,
    *,
    fmt: CodeFormat = DEFAULT_FORMAT,
) -> str:
    _check_code_length(code_length)
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValueError("latitude and longitude must be finite")

    latitude = clip_latitude(latitude)
    longitude = normalize_longitude(longitude)
    # Keep the pole decodable: step one cell south of 90.
    if latitude == LATITUDE_MAX:
        latitude -= compute_latitude_precision(code_length)

    code, lat_rest, lng_rest = _encode_pairs(
        latitude, longitude, min(code_length, PAIR_CODE_LENGTH), fmt
    )
    if code_length > PAIR_CODE_LENGTH:
        code += _encode_grid(lat_rest, lng_rest, code_length - PAIR_CODE_LENGTH, fmt)
    return code


def _encode_pairs(
    latitude: float, longitude: float, code_length: int, fmt: CodeFormat
) -> tuple[str, float, float]:
    """Encode the pair phase; also return the unconsumed lat/lng remainders."""

    out: list[str] = []
    adjusted_lat = latitude + LATITUDE_MAX
    adjusted_lng = longitude + LONGITUDE_MAX

    # Count digits separately: ``out`` may already hold the separator.
    digit_count = 0
    while digit_count < code_length:
        place_value = PAIR_RESOLUTIONS[digit_count // 2]

        digit = _digit(adjusted_lat, place_value, ENCODING_BASE)
        adjusted_lat -= digit * place_value
        out.append(fmt.alphabet[digit])

        digit = _digit(adjusted_lng, place_value, ENCODING_BASE)
        adjusted_lng -= digit * place_value
        out.append(fmt.alphabet[digit])

        digit_count += 2
        if digit_count == fmt.separator_position and digit_count < code_length:
            out.append(fmt.separator)

    if len(out) < fmt.separator_position:
        out.extend(fmt.padding_character * (fmt.separator_position - len(out)))
    if len(out) == fmt.separator_position:
        out.append(fmt.separator)

    return "".join(out), adjusted_lat, adjusted_lng


def _encode_grid(
    lat_rest: float, lng_rest: float, code_length: int, fmt: CodeFormat
) -> str:
    out: list[str] = []
    lat_place = GRID_SIZE_DEGREES
    lng_place = GRID_SIZE_DEGREES

    for _ in range(code_length):
        lat_place /= GRID_ROWS
        lng_place /= GRID_COLUMNS
        row = _digit(lat_rest, lat_place, GRID_ROWS)
        col = _digit(lng_rest, lng_place, GRID_COLUMNS)
        lat_rest -= row * lat_place
        lng_rest -= col * lng_place
        out.append(fmt.alphabet[row * GRID_COLUMNS + col])

    return "".join(out)


# Decode


def decode(code: str, *, fmt: CodeFormat = DEFAULT_FORMAT) -> CodeArea:
    if not is_full(code, fmt=fmt):
        raise ValueError(f"Passed Open Location Code is not a valid full code: {code!r}")

    digits = (
        code.replace(fmt.separator, "").replace(fmt.padding_character, "").upper()
    )
    area = _decode_pairs(digits[:PAIR_CODE_LENGTH], fmt)
    if len(digits) <= PAIR_CODE_LENGTH:
        return area

    grid = _decode_grid(digits[PAIR_CODE_LENGTH:], fmt)
    return CodeArea(
        latitude_lo=area.latitude_lo + grid.latitude_lo,
        longitude_lo=area.longitude_lo + grid.longitude_lo,
        latitude_hi=area.latitude_lo + grid.latitude_hi,
        longitude_hi=area.longitude_lo + grid.longitude_hi,
        code_length=area.code_length + grid.code_length,
    )


def _decode_pairs(digits: str, fmt: CodeFormat) -> CodeArea:
    lat_lo, lat_hi = _decode_pairs_sequence(digits, 0, fmt)
    lng_lo, lng_hi = _decode_pairs_sequence(digits, 1, fmt)
    return CodeArea(
        latitude_lo=lat_lo - LATITUDE_MAX,
        longitude_lo=lng_lo - LONGITUDE_MAX,
        latitude_hi=lat_hi - LATITUDE_MAX,
        longitude_hi=lng_hi - LONGITUDE_MAX,
        code_length=len(digits),
    )


def _decode_pairs_sequence(
    digits: str, offset: int, fmt: CodeFormat
) -> tuple[float, float]:
    """Sum every other digit starting at ``offset`` (0 = lat, 1 = lng)."""

    i = 0
    value = 0.0
    while i * 2 + offset < len(digits):
        value += fmt.alphabet.index(digits[i * 2 + offset]) * PAIR_RESOLUTIONS[i]
        i += 1
    return value, value + PAIR_RESOLUTIONS[i - 1]


def _decode_grid(digits: str, fmt: CodeFormat) -> CodeArea:
    lat_lo = 0.0
    lng_lo = 0.0
    lat_place = GRID_SIZE_DEGREES
    lng_place = GRID_SIZE_DEGREES

    for ch in digits:
        row, col = divmod(fmt.alphabet.index(ch), GRID_COLUMNS)
        lat_place /= GRID_ROWS
        lng_place /= GRID_COLUMNS
        lat_lo += row * lat_place
        lng_lo += col * lng_place

    return CodeArea(
        latitude_lo=lat_lo,
        longitude_lo=lng_lo,
        latitude_hi=lat_lo + lat_place,
        longitude_hi=lng_lo + lng_place,
        code_length=len(digits),
    )


# Shorten / recover


def shorten(
    code: str,
    latitude: float,
    longitude: float,
    *,
    fmt: CodeFormat = DEFAULT_FORMAT,
) -> str:
    """Drop as many leading digits as the reference location allows.

    The reference must sit within a quarter of the dropped prefix's cell size
    of the code center, so ``recover`` with the same reference can rebuild
    the prefix unambiguously.
    """

    if not is_full(code, fmt=fmt):
        raise ValueError(f"Passed code is not valid and full: {code!r}")
    if is_padded(code, fmt=fmt):
        raise ValueError(f"Cannot shorten padded codes: {code!r}")

    area = decode(code, fmt=fmt)
    latitude_diff = abs(clip_latitude(latitude) - area.latitude_center)
    longitude_diff = abs(normalize_longitude(longitude) - area.longitude_center)

    canonical = encode(
        area.latitude_center, area.longitude_center, area.code_length, fmt=fmt
    )
    for trim in range(fmt.separator_position, MIN_CODE_LENGTH - 1, -2):
        if trim >= area.code_length:
            continue
        threshold = compute_latitude_precision(trim) / 4
        if latitude_diff < threshold and longitude_diff < threshold:
            return canonical[trim:]

    raise ValueError("Reference location is too far from the code center")


def recover(
    code: str,
    latitude: float,
    longitude: float,
    code_length: int = DEFAULT_CODE_LENGTH,
    *,
    fmt: CodeFormat = DEFAULT_FORMAT,
) -> str:
    """Rebuild a full code from a short one and a nearby reference location."""

    if not is_short(code, fmt=fmt):
        if is_full(code, fmt=fmt):
            return code
        raise ValueError(f"Passed short code is not valid: {code!r}")

    reference_latitude = clip_latitude(latitude)
    reference_longitude = normalize_longitude(longitude)

    digits_to_recover = fmt.separator_position - code.find(fmt.separator)
    # Height and width in degrees of the missing prefix.
    prefix_precision = float(ENCODING_BASE ** (2 - digits_to_recover // 2))

    prefix = encode(reference_latitude, reference_longitude, fmt=fmt)
    area = decode(prefix[:digits_to_recover] + code.upper(), fmt=fmt)

    # The blind prefix can land one cell off; step towards the reference,
    # without leaving the valid latitude range.
    recovered_latitude = area.latitude_center
    latitude_diff = recovered_latitude - reference_latitude
    if (
        latitude_diff > prefix_precision / 2
        and recovered_latitude - prefix_precision > -LATITUDE_MAX
    ):
        recovered_latitude -= prefix_precision
    elif (
        latitude_diff < -prefix_precision / 2
        and recovered_latitude + prefix_precision < LATITUDE_MAX
    ):
        recovered_latitude += prefix_precision

    recovered_longitude = area.longitude_center
    longitude_diff = recovered_longitude - reference_longitude
    if longitude_diff > prefix_precision / 2:
        recovered_longitude -= prefix_precision
    elif longitude_diff < -prefix_precision / 2:
        recovered_longitude += prefix_precision

    return encode(recovered_latitude, recovered_longitude, code_length, fmt=fmt)


def shorten_by4(
    code: str,
    latitude: float,
    longitude: float,
    *,
    fmt: CodeFormat = DEFAULT_FORMAT,
) -> str:
    """Deprecated: drop four leading digits when within 0.25 degrees."""

    warnings.warn(
        "shorten_by4() is deprecated; use shorten()", DeprecationWarning, stacklevel=2
    )
    return _shorten_by(4, code, latitude, longitude, 0.25, fmt)


def shorten_by6(
    code: str,
    latitude: float,
    longitude: float,
    *,
    fmt: CodeFormat = DEFAULT_FORMAT,
) -> str:
    """Deprecated: drop six leading digits when within 0.0125 degrees."""

    warnings.warn(
        "shorten_by6() is deprecated; use shorten()", DeprecationWarning, stacklevel=2
    )
    return _shorten_by(6, code, latitude, longitude, 0.0125, fmt)


def _shorten_by(
    trim_length: int,
    code: str,
    latitude: float,
    longitude: float,
    max_range: float,
    fmt: CodeFormat,
) -> str:
    if not is_full(code, fmt=fmt):
        raise ValueError(f"Passed code is not valid and full: {code!r}")
    if trim_length > fmt.separator_position:
        raise ValueError(f"Cannot trim {trim_length} digits ahead of the separator")

    area = decode(code, fmt=fmt)
    if not PAIR_CODE_LENGTH <= area.code_length <= PAIR_CODE_LENGTH + 1:
        raise ValueError(
            f"Code length must be between {PAIR_CODE_LENGTH} and {PAIR_CODE_LENGTH + 1}"
        )

    latitude = clip_latitude(latitude)
    longitude = normalize_longitude(longitude)
    if (
        abs(area.latitude_center - latitude) > max_range
        or abs(area.longitude_center - longitude) > max_range
    ):
        return code
    return code.upper()[trim_length:]


# Distance


def distance(area: CodeArea) -> float:
    """Approximate size of the cell in meters (mean of top edge and diagonal)."""

    top = haversine_m(*area.northwest, *area.northeast)
    diagonal = haversine_m(*area.northwest, *area.southeast)
    return (top + diagonal) / 2.0
