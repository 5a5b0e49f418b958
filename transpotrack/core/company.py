"""Company profile and document defaults, kept as JSON in the settings table"""
import copy
import json
import logging

from .models import Setting

logger = logging.getLogger(__name__)

COMPANY_SETTINGS_KEY = 'company'

DEFAULT_COMPANY_SETTINGS = {
    'name': 'ALL INDIA LOGISTICS',
    'address': '',
    'phoneNumbers': [],
    'email': '',
    'website': '',
    'gstin': '',
    'themeColor': '#0D47A1',
    'logoUrl': None,
    'defaultBankDetails': {
        'accountHolderName': 'ALL INDIA LOGISTICS',
        'bankName': 'HDFC Bank',
        'accountNumber': '50200012345678',
        'ifscCode': 'HDFC0001234',
    },
    'defaultTerms': (
        "1. The goods are accepted for transport at owner's risk.\n"
        "2. We are not responsible for leakage, breakage, or damage.\n"
        "3. Delivery will be made against the consignee's copy."
    ),
    'defaultRiskType': "AT OWNER'S RISK",
    'defaultRemarks': 'Handle with care',
}


def get_company_settings():
    """Defaults overlaid with whatever has been stored"""
    merged = copy.deepcopy(DEFAULT_COMPANY_SETTINGS)
    setting = Setting.objects.filter(key=COMPANY_SETTINGS_KEY).first()
    if setting is None:
        return merged
    try:
        stored = json.loads(setting.value or '{}')
    except ValueError:
        logger.warning("Stored company settings are not valid JSON, using defaults")
        return merged
    for key, value in stored.items():
        if key == 'defaultBankDetails' and isinstance(value, dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def save_company_settings(values):
    """Merge `values` into the stored settings and return the full result"""
    merged = get_company_settings()
    for key, value in values.items():
        if key == 'defaultBankDetails' and isinstance(value, dict):
            merged[key].update(value)
        else:
            merged[key] = value
    Setting.objects.update_or_create(
        key=COMPANY_SETTINGS_KEY,
        defaults={
            'value': json.dumps(merged),
            'description': 'Company profile and LR/invoice defaults',
        }
    )
    return merged


def reset_company_settings():
    """Drop the stored settings so the built-in defaults apply again"""
    Setting.objects.filter(key=COMPANY_SETTINGS_KEY).delete()
    return get_company_settings()
