"""Round-robin selection of sandbox verification subjects.

The screening provider's sandbox only answers for pre-registered test
subjects, never for real applicant data. Every pool lists the same four
slots: entries 0-1 are clean profiles and entries 2-3 carry adverse records,
so repeated runs exercise both outcomes.
"""

from __future__ import annotations

import copy
import threading
from typing import Any, Mapping, Sequence

CHECK_TYPES: tuple[str, ...] = ("fraud", "identity", "credit", "criminal", "eviction")

_CLEAN_FRAUD_SUBJECT: dict[str, Any] = {
    "email": "example@atdata.com",
    "firstName": "John",
    "lastName": "Doe",
    "phoneNumber": "1234929999",
    "ipAddress": "47.25.65.96",
    "address": {
        "addressLine1": "15900 SPACE CN",
        "city": "HOUSTON",
        "state": "TX",
        "postalCode": "77062",
    },
}

_RISKY_FRAUD_SUBJECT: dict[str, Any] = {
    "email": "fake.person@nowhere.invalid",
    "firstName": "FAKE",
    "lastName": "PERSON",
    "phoneNumber": "0000000000",
    "ipAddress": "0.0.0.0",
    "address": {
        "addressLine1": "999 NOWHERE ST",
        "city": "FAKETOWN",
        "state": "CA",
        "postalCode": "00000",
    },
}

# The sandbox has a single clean fraud subject, so it fills both clean slots.
FRAUD_POOL: tuple[dict[str, Any], ...] = (
    _CLEAN_FRAUD_SUBJECT,
    _CLEAN_FRAUD_SUBJECT,
    _RISKY_FRAUD_SUBJECT,
    _RISKY_FRAUD_SUBJECT,
)

_UNVERIFIABLE_SUBJECT: dict[str, Any] = {
    "firstName": "FAKE",
    "lastName": "PERSON",
    "ssn": "0000",
    "dateOfBirth": "1999-01-01",
    "streetAddress1": "999 NOWHERE ST",
    "city": "FAKETOWN",
    "state": "CA",
    "zipCode": "00000",
    "homePhone": "0000000000",
}

# Identity verification expects ``streetAddress1``, not ``streetAddress``.
IDENTITY_POOL: tuple[dict[str, Any], ...] = (
    {
        "firstName": "MIRANDA",
        "lastName": "JJUNIPER",
        "ssn": "540325127",
        "dateOfBirth": "1955-11-13",
        "streetAddress1": "1678 NE 41ST",
        "city": "ATLANTA",
        "state": "GA",
        "zipCode": "30302",
        "homePhone": "4786251234",
    },
    {
        "firstName": "JOHN",
        "lastName": "COPE",
        "ssn": "574709961",
        "dateOfBirth": "1973-08-01",
        "streetAddress1": "511 SYCAMORE AVE",
        "city": "HAYWARD",
        "state": "CA",
        "zipCode": "94544",
        "homePhone": "5105811251",
    },
    _UNVERIFIABLE_SUBJECT,
    _UNVERIFIABLE_SUBJECT,
)


def _bureau_subject(
    first: str,
    middle: str,
    last: str,
    ssn: str,
    birth_date: str,
    line1: str,
    line2: str,
    city: str,
    state: str,
    postal_code: str,
) -> dict[str, Any]:
    return {
        "firstName": first,
        "middleName": middle,
        "lastName": last,
        "suffix": "",
        "ssn": ssn,
        "birthDate": birth_date,
        "addresses": [
            {
                "borrowerResidencyType": "Current",
                "addressLine1": line1,
                "addressLine2": line2,
                "city": city,
                "state": state,
                "postalCode": postal_code,
            }
        ],
    }


# All four return bureau data; 2-3 pair with adverse eviction and criminal subjects.
CREDIT_POOL: tuple[dict[str, Any], ...] = (
    _bureau_subject("DIANE", "", "BARABAS", "666283370", "", "19955 N MADERA AVE", " ", "KERMAN", "CA", "93630"),
    _bureau_subject(
        "EILEEN", "M", "BRADY", "666883007", "1972-11-22", "31 LONDON CT", " ", "PLEASANTVILLE", "NJ", "082344434"
    ),
    _bureau_subject(
        "EUGENE", "F", "BEAUPRE", "666582109", "1955-06-23", "5151 N CEDAR AVE", "APT 102", "FRESNO", "CA", "937107453"
    ),
    _bureau_subject("NATALIE", "A", "BLACK", "666207378", "", "46 E 41ST ST", "# 2", "COVINGTON", "KY", "410151711"),
)


def _records_subject(reference: str, first: str, middle: str, last: str, **details: str) -> dict[str, Any]:
    return {
        "reference": reference,
        "subjectInfo": {"first": first, "middle": middle, "last": last, **details},
    }


_BARABAS = {
    "dob": "01-01-1970",
    "ssn": "666-28-3370",
    "houseNumber": "19955",
    "streetName": "N MADERA AVE",
    "city": "KERMAN",
    "state": "CA",
    "zip": "93630",
}
_BRADY = {
    "dob": "11-22-1972",
    "ssn": "666-88-3007",
    "houseNumber": "31",
    "streetName": "LONDON CT",
    "city": "PLEASANTVILLE",
    "state": "NJ",
    "zip": "08234",
}
_LANDINGS = {"houseNumber": "272", "streetName": "LANDINGS", "city": "MERRITT ISLAND", "state": "FL", "zip": "32952"}

# Slots 0-1 are bureau subjects unknown to the records database, so they come back clean.
EVICTION_POOL: tuple[dict[str, Any], ...] = (
    _records_subject("tenantscreen-evic-clean-0", "DIANE", "", "BARABAS", **_BARABAS),
    _records_subject("tenantscreen-evic-clean-1", "EILEEN", "M", "BRADY", **_BRADY),
    _records_subject(
        "tenantscreen-evic-hit-2", "Kris", "X", "Consumer", dob="01-02-1982", ssn="666-44-3322", **_LANDINGS
    ),
    _records_subject(
        "tenantscreen-evic-hit-3", "Harold", "X", "Chuang", dob="01-11-1982", ssn="666-44-3331", **_LANDINGS
    ),
)

CRIMINAL_POOL: tuple[dict[str, Any], ...] = (
    _records_subject("tenantscreen-crim-clean-0", "DIANE", "", "BARABAS", **_BARABAS),
    _records_subject("tenantscreen-crim-clean-1", "EILEEN", "M", "BRADY", **_BRADY),
    _records_subject(
        "tenantscreen-crim-hit-2",
        "Jennifer",
        "X",
        "Ray",
        dob="09-03-1972",
        ssn="123-45-6789",
        **{**_LANDINGS, "houseNumber": "275", "zip": "32955"},
    ),
    _records_subject(
        "tenantscreen-crim-hit-3", "Harold", "X", "Chuang", dob="02-28-1965", ssn="123-45-6789", **_LANDINGS
    ),
)

DEFAULT_POOLS: dict[str, Sequence[Mapping[str, Any]]] = {
    "fraud": FRAUD_POOL,
    "identity": IDENTITY_POOL,
    "credit": CREDIT_POOL,
    "criminal": CRIMINAL_POOL,
    "eviction": EVICTION_POOL,
}


class IdentityRotation:
    """Process-wide round-robin over per-check identity pools."""

    def __init__(self, pools: Mapping[str, Sequence[Mapping[str, Any]]] | None = None) -> None:
        source = DEFAULT_POOLS if pools is None else pools
        self._pools = {check: tuple(pool) for check, pool in source.items()}
        for check, pool in self._pools.items():
            if not pool:
                raise ValueError(f"Identity pool for {check!r} is empty")
        self._counters = {check: 0 for check in self._pools}
        self._lock = threading.Lock()

    def next_identity(self, check: str) -> dict[str, Any]:
        try:
            pool = self._pools[check]
        except KeyError as exc:
            raise KeyError(f"Unknown check type: {check!r}") from exc
        with self._lock:
            index = self._counters[check] % len(pool)
            self._counters[check] += 1
        return copy.deepcopy(dict(pool[index]))

    def position(self, check: str) -> int:
        return self._counters[check]

    def reset(self) -> None:
        with self._lock:
            for check in self._counters:
                self._counters[check] = 0


__all__ = ["CHECK_TYPES", "DEFAULT_POOLS", "IdentityRotation"]
