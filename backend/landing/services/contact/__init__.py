from .validation import calculate_average, extract_form_data, full_name, validate_form

__all__ = ['calculate_average', 'extract_form_data', 'full_name', 'validate_form']
