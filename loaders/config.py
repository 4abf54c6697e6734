"""
Configuration for the installment sheet API.

Module-level constants hold the fixed parts of the schema (cache key, size
ceiling, header aliases). Everything that varies per deployment lives in
SourceConfig, which is built once and passed to the services that need it.
"""

import os
from dataclasses import dataclass

# Single cache entry holding the whole payload
CACHE_KEY = 'all_rows_v1'
DEFAULT_CACHE_SECONDS = 300
CACHE_MAX_BYTES = 90 * 1024   # Skip write-through above this serialized size

DEFAULT_SHEET_NAME = 'Sheet1'
DEFAULT_TIME_ZONE = 'UTC'
DEFAULT_CACHE_DB_URL = 'sqlite:///cache.db'

WORKBOOK_SUFFIXES = ('.xlsx', '.xlsm')

# Normalized header keys that all mean "installment status"
STATUS_CANDIDATE_KEYS = ('installment_status', 'installmentstatus')
# Original header text that wins outright among status candidates
STATUS_EXACT_HEADER = 'Installment_status'
STATUS_FIELD = 'Installment_status'

# normalized header -> canonical field. Unlisted keys pass through unchanged.
HEADER_ALIASES = {
    'regno': 'RegNo',
    'reg_no': 'RegNo',
    'registration_no': 'RegNo',
    'registration_number': 'RegNo',
    'studentname': 'StudentName',
    'student_name': 'StudentName',
    'name': 'StudentName',
    'mobile': 'Mobile',
    'mobile_no': 'Mobile',
    'phone': 'Mobile',
    'contact_no': 'Mobile',
    'email': 'Email',
    'email_id': 'Email',
    'course': 'Course',
    'course_name': 'Course',
    'batch': 'Batch',
    'center': 'Center',
    'centre': 'Center',
    'center_name': 'Center',
    'scheme': 'Scheme',
    'admissiondate': 'AdmissionDate',
    'admission_date': 'AdmissionDate',
    'duedate': 'DueDate',
    'due_date': 'DueDate',
    'next_due_date': 'DueDate',
    'lastpaymentdate': 'LastPaymentDate',
    'last_payment_date': 'LastPaymentDate',
    'coursefee': 'CourseFee',
    'course_fee': 'CourseFee',
    'total_fee': 'CourseFee',
    'paidamount': 'PaidAmount',
    'paid_amount': 'PaidAmount',
    'amount_paid': 'PaidAmount',
    'remainingamount': 'RemainingAmount',
    'remaining_amount': 'RemainingAmount',
    'balance': 'RemainingAmount',
    'installmentamount': 'InstallmentAmount',
    'installment_amount': 'InstallmentAmount',
    'baddebt': 'BadDebt',
    'bad_debt': 'BadDebt',
    'status': 'Status',
    'student_status': 'Status',
}

# camelCase option names accepted by SourceConfig.from_mapping
_OPTION_NAMES = {
    'spreadsheetId': 'spreadsheet_id',
    'spreadsheetName': 'spreadsheet_name',
    'sheetName': 'sheet_name',
    'cacheSeconds': 'cache_seconds',
    'includeOriginalHeaders': 'include_original_headers',
    'timeZone': 'time_zone',
    'dataDir': 'data_dir',
    'cacheDbUrl': 'cache_db_url',
}

ENV_PREFIX = 'SHEET_API_'


def _as_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class SourceConfig:
    """
    Where to read rows from and how long to keep them cached.

    Either spreadsheet_id (a path to a workbook) or spreadsheet_name (a file
    name looked up inside data_dir) must be set; spreadsheet_id wins when
    both are present.
    """
    spreadsheet_id: str = ''
    spreadsheet_name: str = ''
    sheet_name: str = DEFAULT_SHEET_NAME
    cache_seconds: int = DEFAULT_CACHE_SECONDS
    include_original_headers: bool = False
    time_zone: str = DEFAULT_TIME_ZONE
    data_dir: str = '.'
    cache_db_url: str = DEFAULT_CACHE_DB_URL

    @classmethod
    def from_mapping(cls, options):
        """
        Build a config from camelCase or snake_case option names.

        Examples:
            >>> SourceConfig.from_mapping({'spreadsheetName': 'Fees', 'cacheSeconds': '60'}).cache_seconds
            60
        """
        kwargs = {}
        for key, value in (options or {}).items():
            name = _OPTION_NAMES.get(key, key)
            if name not in cls.__dataclass_fields__ or value is None:
                continue
            kwargs[name] = value

        if 'cache_seconds' in kwargs:
            kwargs['cache_seconds'] = int(kwargs['cache_seconds'])
        if 'include_original_headers' in kwargs:
            kwargs['include_original_headers'] = _as_bool(kwargs['include_original_headers'])
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ=None):
        """Read SHEET_API_SPREADSHEET_ID, SHEET_API_SHEET_NAME, ... from the environment."""
        environ = os.environ if environ is None else environ
        options = {}
        for name in cls.__dataclass_fields__:
            env_name = ENV_PREFIX + name.upper()
            if env_name in environ:
                options[name] = environ[env_name]
        return cls.from_mapping(options)
