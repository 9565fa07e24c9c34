"""
formats.py - well-known string formats.

Public API
----------
Email
    Regex rulesets ``gmail`` (default), ``html5``, ``rfc5322`` and ``unicode``.
Phone
    Digits-only E.164 numbers with a leading-plus-sign policy and an
    optional country-code allow-list.
URI
    Scheme allow-list, query-string and trailing-slash policies; the
    output is the re-assembled URI.
UUID
    Any version or one of ``v1`` .. ``v8``; the output is lower-cased.
IP / CIDR
    IPv4 and IPv6 addresses / networks, parsed with :mod:`ipaddress`.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass, replace
from typing import Any, Optional
from urllib.parse import urlsplit, urlunsplit

import phonenumbers

from ..errors import SchemaError
from ..issue import Escaped
from ..parameterized import Parameterized
from ..result import Err, Ok
from ..utils import coerce_flag, parse_integer
from .base import Type, json_type
from .commons import check_inclusion, check_length, check_regex, check_type, fail, is_int, require_choice, require_int

__all__ = ["Email", "Phone", "URI", "UUID", "IP", "CIDR"]


# --------------------------------------------------------------------------- #
# Email                                                                       #
# --------------------------------------------------------------------------- #

_EMAIL_RULESETS = {
    "gmail": re.compile(
        r"^(?!\.)(?!.*\.\.)([A-Za-z0-9_'+\-\.]*)[A-Za-z0-9_+-]@([A-Za-z0-9][A-Za-z0-9\-]*\.)+[A-Za-z]{2,}$"
    ),
    "html5": re.compile(
        r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
        r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
    ),
    "rfc5322": re.compile(
        r"^(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|(\".+\"))@"
        r"((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$"
    ),
    "unicode": re.compile(r"^[^\s@\"]{1,64}@[^\s@]{1,255}$"),
}


@dataclass(frozen=True, kw_only=True)
class Email(Type):
    ruleset: str = "gmail"

    OPTIONS = {"ruleset": None}

    def _check_ruleset(self, value):
        return require_choice("Email", "ruleset", value, tuple(_EMAIL_RULESETS))

    def parse_type(self, value, options):
        regex = Parameterized.new(_EMAIL_RULESETS[self.ruleset], {"error": "is invalid"})
        return check_type(value, "string") or check_regex(value, regex) or Ok(value)

    def to_json_schema(self):
        return {**self._annotations(), "type": json_type("string", self.required), "format": "email"}


# --------------------------------------------------------------------------- #
# Phone                                                                       #
# --------------------------------------------------------------------------- #

_PHONE_PATTERNS = {
    "forbid": (r"^[0-9]{8,15}$", "must contain only digits"),
    "keep": (r"^\+?[0-9]{8,15}$", "must contain only digits and optionally a leading plus sign (+)"),
    "always": (r"^\+[0-9]{8,15}$", "must contain only digits and a leading plus sign (+)"),
    "require": (r"^\+[0-9]{8,15}$", "must contain only digits and a leading plus sign (+)"),
}

_PHONE_LENGTHS = {"always": (9, 16), "require": (9, 16), "forbid": (8, 15), "keep": (8, 16)}


@dataclass(frozen=True, kw_only=True)
class Phone(Type):
    """E.164 phone numbers; the country code is resolved with :mod:`phonenumbers`."""

    leading_plus_sign: str = "keep"
    allowed_country_codes: Optional[Parameterized] = None

    OPTIONS = {
        "leading_plus_sign": None,
        "allowed_country_codes": "country code must be %{expected}",
    }

    def _check_leading_plus_sign(self, value):
        return require_choice("Phone", "leading_plus_sign", value, tuple(_PHONE_PATTERNS))

    def _check_allowed_country_codes(self, value):
        value = tuple(value) if isinstance(value, (list, tuple)) else (value,)
        invalid = [
            c for c in value
            if not isinstance(c, str) or not c.isdigit() or int(c) not in phonenumbers.COUNTRY_CODE_TO_REGION_CODE
        ]
        if not value or invalid:
            raise SchemaError(f"Phone option :allowed_country_codes has invalid country codes {invalid!r}")
        return value

    def parse_type(self, value, options):
        mismatch = check_type(value, "string")
        if mismatch:
            return mismatch

        mode = self.leading_plus_sign
        if mode == "always" and not value.startswith("+"):
            value = "+" + value
        elif mode == "forbid" and value.startswith("+"):
            return fail("must not start with a leading plus sign (+)")
        elif mode == "require" and not value.startswith("+"):
            return fail("must start with a leading plus sign (+)")

        digits = value[1:] if value.startswith("+") else value
        pattern, error = _PHONE_PATTERNS[mode]
        mismatch = (
            check_length(
                digits,
                min=Parameterized.new(8, {"error": "must be at least %{expected} digits long, got %{actual}"}),
                max=Parameterized.new(15, {"error": "must be at most %{expected} digits long, got %{actual}"}),
            )
            or check_regex(value, Parameterized.new(re.compile(pattern), {"error": error}))
        )
        if mismatch:
            return mismatch

        try:
            code = str(phonenumbers.parse("+" + digits, None).country_code)
        except phonenumbers.NumberParseException:
            return fail("invalid country code")
        return check_inclusion(code, self.allowed_country_codes) or Ok(value)

    def to_json_schema(self):
        pattern, _ = _PHONE_PATTERNS[self.leading_plus_sign]
        low, high = _PHONE_LENGTHS[self.leading_plus_sign]
        return {
            **self._annotations(),
            "type": json_type("string", self.required),
            "format": "phone",
            "pattern": pattern,
            "minLength": low,
            "maxLength": high,
        }


# --------------------------------------------------------------------------- #
# URI                                                                         #
# --------------------------------------------------------------------------- #

_HAS_EXTENSION = re.compile(r"\.[a-z]+$")


@dataclass(frozen=True, kw_only=True)
class URI(Type):
    allowed_schemes: Optional[Parameterized] = None
    query_string: Parameterized = Parameterized("keep", {"error": "query string is not allowed"})
    trailing_slash: str = "keep"

    OPTIONS = {
        "allowed_schemes": "scheme must be %{expected}, got %{actual}",
        "query_string": "query string is not allowed",
        "trailing_slash": None,
    }

    def _check_allowed_schemes(self, value):
        value = tuple(value) if isinstance(value, (list, tuple)) else (value,)
        if not value or not all(isinstance(s, str) and s for s in value):
            raise SchemaError(f"URI option :allowed_schemes must be non-empty strings, got {value!r}")
        return value

    def _check_query_string(self, value):
        return require_choice("URI", "query_string", value, ("keep", "forbid", "trim"))

    def _check_trailing_slash(self, value):
        return require_choice("URI", "trailing_slash", value, ("keep", "always", "trim"))

    def parse_type(self, value, options):
        mismatch = check_type(value, "string")
        if mismatch:
            return mismatch
        try:
            parts = urlsplit(value)
        except ValueError:
            return fail("is invalid")

        mismatch = check_inclusion(parts.scheme, self.allowed_schemes)
        if mismatch:
            return mismatch

        if parts.query:
            if self.query_string.value == "forbid":
                return fail(self.query_string.error)
            if self.query_string.value == "trim":
                parts = parts._replace(query="")

        return Ok(urlunsplit(parts._replace(path=self._slash(parts.path))))

    def _slash(self, path: str) -> str:
        if self.trailing_slash == "keep" or _HAS_EXTENSION.search(path):
            return path
        if self.trailing_slash == "trim":
            return path.rstrip("/")
        return path if path.endswith("/") else path + "/"

    def to_json_schema(self):
        return {**self._annotations(), "type": json_type("string", self.required), "format": "uri"}


# --------------------------------------------------------------------------- #
# UUID                                                                        #
# --------------------------------------------------------------------------- #

_UUID = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-([0-9a-fA-F])[0-9a-fA-F]{3}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
_UUID_VERSIONS = ("any",) + tuple(f"v{n}" for n in range(1, 9))


@dataclass(frozen=True, kw_only=True)
class UUID(Type):
    version: str = "any"

    OPTIONS = {"version": None}

    def _check_version(self, value):
        return require_choice("UUID", "version", value, _UUID_VERSIONS)

    def parse_type(self, value, options):
        mismatch = check_type(value, "string")
        if mismatch:
            return mismatch
        match = _UUID.match(value)
        if match is None:
            return fail("is invalid")
        actual = f"v{match.group(1).lower()}"
        if self.version != "any" and actual != self.version:
            return fail(
                "expected a uuid %{expected}, got %{actual}",
                expected=Escaped(self.version),
                actual=Escaped(actual),
            )
        return Ok(value.lower())

    def to_json_schema(self):
        return {**self._annotations(), "type": json_type("string", self.required), "format": "uuid"}


# --------------------------------------------------------------------------- #
# IP                                                                          #
# --------------------------------------------------------------------------- #

_IP_PRESETS = {
    "private": (("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16", "fc00::/7"), "must be a private IP address"),
    "loopback": (("127.0.0.0/8", "::1/128"), "must be a loopback IP address"),
    "link_local": (("169.254.0.0/16", "fe80::/10"), "must be a link-local IP address"),
}

_VERSIONS = ("any", "v4", "v6")


def _address(version: str, text: str):
    """Parse *text* per *version*; ``None`` when it is not an address."""
    try:
        if version == "v4":
            return ipaddress.IPv4Address(text)
        if version == "v6":
            return ipaddress.IPv6Address(text)
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def _from_parts(value: Any) -> Optional[str]:
    """``(192, 168, 0, 1)`` or an ``ipaddress`` object -> its string form."""
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return str(value)
    if isinstance(value, tuple) and len(value) == 4 and all(is_int(o) and 0 <= o <= 255 for o in value):
        return ".".join(str(o) for o in value)
    if isinstance(value, tuple) and len(value) == 8 and all(is_int(h) and 0 <= h <= 0xFFFF for h in value):
        return str(ipaddress.IPv6Address(":".join(f"{h:x}" for h in value)))
    return None


def _within(address, ranges) -> bool:
    networks = (ipaddress.ip_network(r, strict=False) for r in ranges)
    return any(address in net for net in networks if net.version == address.version)


@dataclass(frozen=True, kw_only=True)
class IP(Type):
    version: str = "any"
    output: str = "string"
    cidr: Optional[Parameterized] = None

    OPTIONS = {"version": None, "output": None, "cidr": "must be within CIDR range %{expected}"}

    def _check_version(self, value):
        return require_choice("IP", "version", value, _VERSIONS)

    def _check_output(self, value):
        return require_choice("IP", "output", value, ("string", "object"))

    def _check_cidr(self, value):
        if isinstance(value, str) and value in _IP_PRESETS:
            return _IP_PRESETS[value][0]
        ranges = (value,) if isinstance(value, str) else tuple(value)
        for r in ranges:
            try:
                ipaddress.ip_network(r, strict=False)
            except (TypeError, ValueError):
                raise SchemaError(f"IP option :cidr got an invalid range {r!r}") from None
        return ranges

    def _set_option(self, name, value):
        updated = super()._set_option(name, value)
        raw = value.value if isinstance(value, Parameterized) else value
        custom = isinstance(value, Parameterized) and "error" in value.params
        if name == "cidr" and isinstance(raw, str) and raw in _IP_PRESETS and not custom:
            preset = Parameterized.new(updated.cidr.value, {"error": _IP_PRESETS[raw][1]})
            updated = replace(updated, cidr=preset)
        return updated

    def parse_type(self, value, options):
        if coerce_flag(options) and not isinstance(value, str):
            text = _from_parts(value)
            if text is None and isinstance(value, tuple):
                return fail("cannot be coerced to IP address")
            value = value if text is None else text

        mismatch = check_type(value, "string")
        if mismatch:
            return mismatch
        address = _address(self.version, value)
        if address is None:
            return fail({
                "any": "is invalid",
                "v4": "must be a valid IPv4 address",
                "v6": "must be a valid IPv6 address",
            }[self.version])

        if self.cidr is not None and not _within(address, self.cidr.value):
            return fail(self.cidr.error, expected=Escaped(", ".join(self.cidr.value)))

        return Ok(str(address) if self.output == "string" else address)

    def to_json_schema(self):
        v4 = {"type": json_type("string", self.required), "format": "ipv4"}
        v6 = {"type": json_type("string", self.required), "format": "ipv6"}
        shape = {"v4": v4, "v6": v6}.get(self.version) or {"oneOf": [v4, v6]}
        return {**self._annotations(), **shape}


# --------------------------------------------------------------------------- #
# CIDR                                                                        #
# --------------------------------------------------------------------------- #

_CIDR_V4 = (
    r"^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
    r"/(?:3[0-2]|[12]?[0-9])$"
)
_CIDR_V6 = (
    r"^(?:[0-9a-fA-F]{1,4}:){0,7}[0-9a-fA-F]{0,4}(?::(?:[0-9a-fA-F]{1,4}:){0,6}[0-9a-fA-F]{0,4})?"
    r"/(?:12[0-8]|1[01][0-9]|[1-9]?[0-9])$"
)


@dataclass(frozen=True, kw_only=True)
class CIDR(Type):
    version: str = "any"
    output: str = "string"
    canonicalize: bool = False
    min_prefix: Optional[Parameterized] = None
    max_prefix: Optional[Parameterized] = None

    OPTIONS = {
        "version": None,
        "output": None,
        "canonicalize": None,
        "min_prefix": "prefix length must be at least %{expected}, got %{actual}",
        "max_prefix": "prefix length must be at most %{expected}, got %{actual}",
    }

    def _check_version(self, value):
        return require_choice("CIDR", "version", value, _VERSIONS)

    def _check_output(self, value):
        return require_choice("CIDR", "output", value, ("string", "tuple", "map"))

    def _check_canonicalize(self, value):
        return require_choice("CIDR", "canonicalize", value, (True, False))

    def _check_min_prefix(self, value):
        return require_int("CIDR", "min_prefix", value, 0)

    def _check_max_prefix(self, value):
        return require_int("CIDR", "max_prefix", value, 1)

    def _coerce(self, value):
        if isinstance(value, (ipaddress.IPv4Network, ipaddress.IPv6Network)):
            return str(value)
        if isinstance(value, dict):
            value = (value.get("ip", value.get("address")), value.get("prefix"))
        if isinstance(value, tuple) and len(value) == 2 and is_int(value[1]):
            text = _from_parts(value[0])
            if text is None:
                return fail("cannot be coerced to CIDR notation")
            return f"{text}/{value[1]}"
        return value

    def parse_type(self, value, options):
        if coerce_flag(options) and not isinstance(value, str):
            value = self._coerce(value)
            if isinstance(value, Err):
                return value

        mismatch = check_type(value, "string")
        if mismatch:
            return mismatch

        parts = value.split("/")
        prefix = parse_integer(parts[1]) if len(parts) == 2 else None
        if prefix is None or prefix < 0:
            return fail("is invalid")
        address = _address(self.version, parts[0])
        if address is None:
            return fail({
                "any": "is invalid",
                "v4": "must be a valid IPv4 CIDR",
                "v6": "must be a valid IPv6 CIDR",
            }[self.version])

        limit = address.max_prefixlen
        if prefix > limit:
            return fail("prefix length must be between %{min} and %{max}, got %{actual}", min=0, max=limit, actual=prefix)
        for bound, beyond in ((self.min_prefix, prefix.__lt__), (self.max_prefix, prefix.__gt__)):
            if bound is not None and beyond(bound.value):
                return fail(bound.error, expected=bound.value, actual=prefix)

        network = ipaddress.ip_network(f"{address}/{prefix}", strict=False)
        if network.network_address != address and not self.canonicalize:
            return fail("must be in canonical form (network address), got '%{actual}'", actual=Escaped(value))

        if self.output == "tuple":
            return Ok((network.network_address, network.broadcast_address, prefix))
        if self.output == "map":
            return Ok({"start": network.network_address, "end": network.broadcast_address, "prefix": prefix})
        return Ok(f"{network.network_address}/{prefix}")

    def to_json_schema(self):
        v4 = {"type": json_type("string", self.required), "pattern": _CIDR_V4}
        v6 = {"type": json_type("string", self.required), "pattern": _CIDR_V6}
        shape = {"v4": v4, "v6": v6}.get(self.version) or {"anyOf": [v4, v6]}
        return {**self._annotations(), **shape}
