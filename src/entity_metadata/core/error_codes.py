# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# Validation subcodes
VALIDATION_TYPE_NAME_MISSING = "validation_type_name_missing"
VALIDATION_VALIDATORS_NOT_LIST = "validation_validators_not_list"
VALIDATION_VALIDATOR_NOT_CONVERTIBLE = "validation_validator_not_convertible"
VALIDATION_VALIDATOR_UNKNOWN = "validation_validator_unknown"
VALIDATION_VALIDATOR_MALFORMED = "validation_validator_malformed"
VALIDATION_NAVIGATION_TARGET_MISSING = "validation_navigation_target_missing"
VALIDATION_UNKNOWN_DATA_TYPE = "validation_unknown_data_type"
VALIDATION_UNKNOWN_KEY_TYPE = "validation_unknown_key_type"

# Metadata subcodes
METADATA_TYPE_ALREADY_EXISTS = "metadata_type_already_exists"
METADATA_TYPE_NOT_FOUND = "metadata_type_not_found"
METADATA_TYPE_AMBIGUOUS = "metadata_type_ambiguous"
METADATA_RESOURCE_NAME_INVALID = "metadata_resource_name_invalid"
METADATA_DATA_SERVICE_INVALID = "metadata_data_service_invalid"
