from landing.services.contact.validation import (
    calculate_average,
    extract_form_data,
    full_name,
    parse_rating,
    validate_form,
)

VALID = {
    'vardas': 'Jonas',
    'pavarde': 'Jonaitis',
    'email': 'a@b.lt',
    'phone': '+370 600 12345',
    'address': 'Vilniaus g. 1',
}


def test_valid_form_has_no_errors():
    assert validate_form(extract_form_data(VALID)) == []


def test_empty_form_reports_each_required_field():
    errors = validate_form(extract_form_data({}))
    assert errors == [
        'Vardas (First Name) is required',
        'Pavardė (Last Name) is required',
        'El. paštas (Email) is required',
        'Telefono numeris (Phone) is required',
        'Adresas (Address) is required',
    ]


def test_whitespace_only_counts_as_missing():
    data = extract_form_data(dict(VALID, vardas='   '))
    assert validate_form(data) == ['Vardas (First Name) is required']


def test_short_and_malformed_values():
    data = extract_form_data({
        'vardas': ' J ',
        'pavarde': 'K',
        'email': 'not-an-email',
        'phone': '12ab567',
        'address': 'abc ',
    })
    assert validate_form(data) == [
        'Vardas must be at least 2 characters',
        'Pavardė must be at least 2 characters',
        'El. paštas must be a valid email address',
        'Telefono numeris must be a valid phone number (at least 7 digits)',
        'Adresas must be at least 5 characters',
    ]


def test_phone_needs_seven_allowed_characters():
    assert validate_form(extract_form_data(dict(VALID, phone='(0) 5-1'))) == []
    assert validate_form(extract_form_data(dict(VALID, phone='123456'))) != []


def test_email_with_trailing_newline_is_rejected():
    assert validate_form(extract_form_data(dict(VALID, email='a@b.lt\n'))) == [
        'El. paštas must be a valid email address'
    ]


def test_calculate_average():
    assert calculate_average({'rating1': '4', 'rating2': '5', 'rating3': '3'}) == '4.0'
    assert calculate_average({}) == '0.0'
    assert calculate_average({'rating1': '10', 'rating2': 'x', 'rating3': ''}) == '3.3'


def test_parse_rating_reads_leading_integer():
    assert parse_rating('7.9') == 7
    assert parse_rating(' 5abc') == 5
    assert parse_rating('abc') == 0
    assert parse_rating(None) == 0


def test_full_name():
    assert full_name(VALID) == 'Jonas Jonaitis'


def test_only_ascii_digits_count():
    # Arabic-Indic digits are not \d in the browser's regex either
    data = extract_form_data(dict(VALID, phone='١٢٣٤٥٦٧'))
    assert validate_form(data) == [
        'Telefono numeris must be a valid phone number (at least 7 digits)'
    ]
    assert parse_rating('٧') == 0
