from flask import Blueprint, jsonify, request, current_app
from landing.services.contact.validation import (
    POPUP_MESSAGE,
    SUCCESS_MESSAGE,
    calculate_average,
    extract_form_data,
    full_name,
    validate_form,
)


contact = Blueprint('contact', __name__)


@contact.route('', methods=['POST'])
def submit_contact_form():
    """
    Validates a contact form submission. Nothing is sent anywhere; a valid
    form gets the success message and the average of the three ratings.
    """
    data = extract_form_data(request.get_json(silent=True) or request.form)
    errors = validate_form(data)
    if errors:
        current_app.logger.warning(f"[contact-invalid] errors={len(errors)} {errors}")
        return jsonify({'success': False, 'errors': errors}), 400

    average = calculate_average(data)
    name = full_name(data)
    current_app.logger.info(f"[contact-valid] {name}: {average}")
    return jsonify({
        'success': True,
        'message': SUCCESS_MESSAGE,
        'popup': POPUP_MESSAGE,
        'full_name': name,
        'rating_average': average,
    })
