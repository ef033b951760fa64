import re
from typing import Dict, List, Mapping

FIELD_NAMES = (
    'vardas', 'pavarde', 'email', 'phone', 'address',
    'rating1', 'rating2', 'rating3',
)
RATING_FIELDS = ('rating1', 'rating2', 'rating3')

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+\Z')
PHONE_RE = re.compile(r'^[\d\s\-+()]{7,}\Z', re.ASCII)
_LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)', re.ASCII)

SUCCESS_MESSAGE = 'Your message has been sent. Thank you!'
POPUP_MESSAGE = 'Duomenys pateikti sėkmingai!'


def extract_form_data(source: Mapping) -> Dict[str, str]:
    """Pick the known fields out of a request payload; missing ones become ''."""
    source = source or {}
    data = {}
    for name in FIELD_NAMES:
        value = source.get(name)
        data[name] = '' if value is None else str(value)
    return data


def _check_name(value: str, required_msg: str, short_msg: str, errors: List[str]) -> None:
    if not value or value.strip() == '':
        errors.append(required_msg)
    elif len(value.strip()) < 2:
        errors.append(short_msg)


def validate_form(data: Mapping) -> List[str]:
    """Return human-readable errors in field order; empty means valid."""
    errors: List[str] = []

    _check_name(data.get('vardas', ''), 'Vardas (First Name) is required',
                'Vardas must be at least 2 characters', errors)
    _check_name(data.get('pavarde', ''), 'Pavardė (Last Name) is required',
                'Pavardė must be at least 2 characters', errors)

    email = data.get('email', '')
    if not email or email.strip() == '':
        errors.append('El. paštas (Email) is required')
    elif not EMAIL_RE.match(email):
        errors.append('El. paštas must be a valid email address')

    phone = data.get('phone', '')
    if not phone or phone.strip() == '':
        errors.append('Telefono numeris (Phone) is required')
    elif not PHONE_RE.match(phone):
        errors.append('Telefono numeris must be a valid phone number (at least 7 digits)')

    address = data.get('address', '')
    if not address or address.strip() == '':
        errors.append('Adresas (Address) is required')
    elif len(address.strip()) < 5:
        errors.append('Adresas must be at least 5 characters')

    return errors


def parse_rating(value) -> int:
    # Leading integer like the page's parseInt; anything else counts as 0.
    if value is None:
        return 0
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else 0


def calculate_average(data: Mapping) -> str:
    total = sum(parse_rating(data.get(name)) for name in RATING_FIELDS)
    return f"{total / 3:.1f}"


def full_name(data: Mapping) -> str:
    return f"{data.get('vardas', '')} {data.get('pavarde', '')}"
