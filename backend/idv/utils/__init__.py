from idv.utils.hashing import hash_password, verify_password
from idv.utils.validators import validate_id_number, validate_email, determine_id_type

__all__ = [
    "hash_password", "verify_password",
    "validate_id_number", "validate_email", "determine_id_type",
]
