"""VAT identifier validation.

Per-country format rules for the 27 supported EU VAT regimes, plus the
check-digit algorithms known for Germany, Austria and France.

A rule stores the pattern of the *national number* only. EU-mode validation
(identifier carries its 2-letter VAT prefix) reuses the same rule with the
prefix prepended, so both variants always stay in sync.
"""
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_LEADING_LETTERS = re.compile(r"^[A-Z]{2}")

# ISO 3166-1 codes whose VAT prefix differs from the country code
_ISO_TO_VAT_PREFIX = {"GR": "EL"}


class VatError(str, Enum):
    """Reason a VAT identifier was rejected."""

    EMPTY_INPUT = "empty_input"
    MISSING_COUNTRY_CODE = "missing_country_code"
    UNSUPPORTED_COUNTRY = "unsupported_country"
    PREFIX_MISMATCH = "prefix_mismatch"
    FORMAT_INVALID = "format_invalid"
    CHECKSUM_INVALID = "checksum_invalid"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation step. ``message`` is set on every failure."""

    valid: bool
    message: Optional[str] = None
    error: Optional[VatError] = None

    @classmethod
    def ok(cls, message: Optional[str] = None) -> "ValidationResult":
        return cls(True, message)

    @classmethod
    def fail(cls, error: VatError, message: str) -> "ValidationResult":
        return cls(False, message, error)


@dataclass(frozen=True)
class CountryRule:
    """Format rule for one country, keyed by its VAT prefix."""

    country_code: str
    pattern: str
    description: str
    checksum: Optional[Callable[[str], ValidationResult]] = None
    vat_prefix: str = ""
    _local_re: "re.Pattern[str]" = field(init=False, repr=False, compare=False)
    _eu_re: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.vat_prefix:
            object.__setattr__(self, "vat_prefix", self.country_code)
        object.__setattr__(self, "_local_re", re.compile(rf"^{self.pattern}$"))
        object.__setattr__(self, "_eu_re", re.compile(rf"^{self.vat_prefix}{self.pattern}$"))

    def regex(self, is_eu_vat: bool) -> "re.Pattern[str]":
        return self._eu_re if is_eu_vat else self._local_re

    def expected(self, is_eu_vat: bool) -> str:
        """Human-readable format, e.g. ``DE + 9 digits``."""
        if is_eu_vat:
            return f"{self.vat_prefix} + {self.description}"
        return self.description


# ── Normalization ────────────────────────────────────────────────────

def normalize_vat_id(raw: Optional[str]) -> str:
    """Keep only ASCII letters and digits, uppercased. Never fails."""
    if not raw:
        return ""
    return _NON_ALNUM.sub("", raw).upper()


def vat_prefix_for(country_code: str) -> str:
    """VAT prefix used for a country (``GR`` -> ``EL``, else unchanged)."""
    code = country_code.upper()
    return _ISO_TO_VAT_PREFIX.get(code, code)


# ── Checksums ────────────────────────────────────────────────────────

def _check_de(national: str) -> ValidationResult:
    """German product-sum algorithm (mod 10 / mod 11) over 8 digits."""
    product = 10
    for ch in national[:8]:
        total = (int(ch) + product) % 10
        if total == 0:
            total = 10
        product = (2 * total) % 11
    check_digit = 11 - product
    last_digit = int(national[8])
    if check_digit == last_digit or (check_digit == 10 and last_digit == 0):
        return ValidationResult.ok()
    return ValidationResult.fail(
        VatError.CHECKSUM_INVALID, "Invalid control digits for German VAT number"
    )


def _check_at(national: str) -> ValidationResult:
    """Austrian U-number: weighted sum of the first 7 digits, 8th is the check."""
    if not national.startswith("U"):
        return ValidationResult.fail(
            VatError.CHECKSUM_INVALID, "Austrian VAT number must start with U"
        )
    digits = national[1:]
    total = 0
    for i, ch in enumerate(digits[:7]):
        d = int(ch)
        total += d if i % 2 == 0 else (d * 2) % 9
    check_digit = (10 - (total % 10)) % 10
    if check_digit == int(digits[7]):
        return ValidationResult.ok()
    return ValidationResult.fail(
        VatError.CHECKSUM_INVALID, "Invalid control digit for Austrian VAT number"
    )


def _check_fr(national: str) -> ValidationResult:
    """French number: numeric part must be divisible by 97."""
    numeric = re.sub(r"\D", "", national)
    if numeric and int(numeric) % 97 == 0:
        return ValidationResult.ok()
    return ValidationResult.fail(
        VatError.CHECKSUM_INVALID, "Invalid check value for French VAT number"
    )


# ── Rule table ───────────────────────────────────────────────────────

_RULES = (
    CountryRule("AT", r"U\d{8}", "U + 8 digits", _check_at),
    CountryRule("BE", r"\d{10}", "10 digits"),
    CountryRule("BG", r"\d{9,10}", "9 or 10 digits"),
    CountryRule("CY", r"\d{8}[A-Z]", "8 digits + 1 letter"),
    CountryRule("CZ", r"\d{8,10}", "8, 9, or 10 digits"),
    CountryRule("DE", r"\d{9}", "9 digits", _check_de),
    CountryRule("DK", r"\d{8}", "8 digits"),
    CountryRule("EE", r"\d{9}", "9 digits"),
    CountryRule("GR", r"\d{9}", "9 digits", vat_prefix="EL"),
    CountryRule("ES", r"[A-Z0-9]\d{7}[A-Z0-9]", "1 letter/digit + 7 digits + 1 letter/digit"),
    CountryRule("FI", r"\d{8}", "8 digits"),
    CountryRule("FR", r"[A-Z0-9]{2}\d{9}", "2 letters/digits + 9 digits", _check_fr),
    CountryRule("HR", r"\d{11}", "11 digits"),
    CountryRule("HU", r"\d{8}", "8 digits"),
    CountryRule("IE", r"[0-9A-Z+*]{8,9}", "8 or 9 characters"),
    CountryRule("IT", r"\d{11}", "11 digits"),
    CountryRule("LT", r"\d{9,12}", "9 or 12 digits"),
    CountryRule("LU", r"\d{8}", "8 digits"),
    CountryRule("LV", r"\d{11}", "11 digits"),
    CountryRule("MT", r"\d{8}", "8 digits"),
    CountryRule("NL", r"\d{9}B\d{2}", "9 digits + B + 2 digits"),
    CountryRule("PL", r"\d{10}", "10 digits"),
    CountryRule("PT", r"\d{9}", "9 digits"),
    CountryRule("RO", r"\d{2,10}", "2-10 digits"),
    CountryRule("SE", r"\d{12}", "12 digits"),
    CountryRule("SI", r"\d{8}", "8 digits"),
    CountryRule("SK", r"\d{10}", "10 digits"),
)

VAT_RULES: Mapping[str, CountryRule] = MappingProxyType({r.vat_prefix: r for r in _RULES})

# Two-letter sequences treated as a country prefix in local mode
KNOWN_PREFIXES = frozenset(VAT_RULES) | frozenset(_ISO_TO_VAT_PREFIX)

SUPPORTED_COUNTRIES = tuple(sorted(VAT_RULES))


def get_rule(country_code: str) -> Optional[CountryRule]:
    """Look up the rule for an ISO or VAT-prefix country code."""
    return VAT_RULES.get(vat_prefix_for(country_code))


# ── Pipeline stages ──────────────────────────────────────────────────

def resolve_national_number(
    vat_id: str, country_code: str, is_eu_vat: bool
) -> tuple[Optional[str], Optional[ValidationResult]]:
    """
    Strip or require the country prefix depending on mode.

    Args:
        vat_id: Normalized identifier
        country_code: Uppercased ISO or VAT-prefix country code
        is_eu_vat: Whether the identifier must carry the VAT prefix

    Returns:
        (national_number, None) on success, (None, failure) otherwise
    """
    prefix = vat_prefix_for(country_code)

    if is_eu_vat:
        if len(vat_id) <= len(prefix):
            return None, ValidationResult.fail(
                VatError.PREFIX_MISMATCH, f"EU VAT ID must include country code {prefix}"
            )
        if not vat_id.startswith(prefix):
            return None, ValidationResult.fail(
                VatError.PREFIX_MISMATCH, f"EU VAT ID must start with country code {prefix}"
            )
        return vat_id[len(prefix):], None

    match = _LEADING_LETTERS.match(vat_id)
    if match and match.group(0) in KNOWN_PREFIXES:
        found = match.group(0)
        if vat_prefix_for(found) == prefix:
            logger.debug("Removed country prefix %s for local VAT validation", found)
            return vat_id[2:], None
        return None, ValidationResult.fail(
            VatError.PREFIX_MISMATCH,
            f"Country mismatch: VAT ID starts with {found} but country code is {country_code}",
        )
    return vat_id, None


def check_format(national: str, rule: CountryRule, is_eu_vat: bool) -> ValidationResult:
    """Match the national number (or prefix + number in EU mode) against the rule."""
    candidate = f"{rule.vat_prefix}{national}" if is_eu_vat else national
    if rule.regex(is_eu_vat).match(candidate):
        return ValidationResult.ok()
    return ValidationResult.fail(
        VatError.FORMAT_INVALID,
        f"Invalid format for {rule.vat_prefix} VAT number. Expected: {rule.expected(is_eu_vat)}",
    )


def check_checksum(national: str, rule: CountryRule) -> ValidationResult:
    """Run the country's check-digit algorithm, if one is known."""
    if rule.checksum is None:
        logger.debug("Control character check not implemented for %s, skipping", rule.vat_prefix)
        return ValidationResult.ok(
            f"Control character check not implemented for {rule.vat_prefix}"
        )
    return rule.checksum(national)


def validate_vat(
    raw_id: Optional[str],
    country_code: Optional[str],
    is_eu_vat: bool = False,
) -> ValidationResult:
    """Validate a VAT identifier for a country.

    Input problems never raise; they come back as ``valid=False`` with a
    message naming the violated rule.

    Examples:
        >>> validate_vat("136695976", "DE").valid
        True
        >>> validate_vat("DE123", "DE", is_eu_vat=True).message
        'Invalid format for DE VAT number. Expected: DE + 9 digits'
        >>> validate_vat("12345678", "XX").message
        'Unsupported country code: XX'
    """
    if not raw_id or not raw_id.strip():
        return ValidationResult.fail(VatError.EMPTY_INPUT, "VAT ID is required")

    code = (country_code or "").strip().upper()
    if not code:
        return ValidationResult.fail(
            VatError.MISSING_COUNTRY_CODE, "Country code is required for VAT validation"
        )

    logger.debug("Validating %s VAT ID %s for country %s", "EU" if is_eu_vat else "local", raw_id, code)
    vat_id = normalize_vat_id(raw_id)

    rule = get_rule(code)
    if rule is None:
        return ValidationResult.fail(VatError.UNSUPPORTED_COUNTRY, f"Unsupported country code: {code}")

    national, failure = resolve_national_number(vat_id, code, is_eu_vat)
    if failure is not None:
        return failure

    result = check_format(national, rule, is_eu_vat)
    if not result.valid:
        return result

    result = check_checksum(national, rule)
    if not result.valid:
        return result

    logger.debug("%s VAT ID validation successful for %s", "EU" if is_eu_vat else "Local", vat_id)
    return ValidationResult.ok()
