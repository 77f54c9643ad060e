from pcrkit.errors import ErrorCategory, InputValidationError, TpmError, TpmkitError


def test_tpm_error_keeps_category_and_message():
    error = TpmError(ErrorCategory.RESOURCE_ERROR, "contract failure")
    assert error.category is ErrorCategory.RESOURCE_ERROR
    assert error.message == "contract failure"
    assert str(error) == "contract failure"


def test_tpm_error_is_a_base_error():
    error = TpmError(ErrorCategory.SECURITY_FAILURE, "programmed failure")
    assert isinstance(error, TpmkitError)
    assert error.category is ErrorCategory.SECURITY_FAILURE
    assert error.message == "programmed failure"


def test_input_validation_error_is_value_error_and_base_error():
    error = InputValidationError("bad input")
    assert isinstance(error, ValueError)
    assert isinstance(error, TpmkitError)
    assert error.message == "bad input"
    assert str(error) == "bad input"


def test_categories_are_distinct():
    categories = list(ErrorCategory)
    assert len({category.value for category in categories}) == len(categories)
    assert ErrorCategory("backend_error") is ErrorCategory.BACKEND_ERROR


def test_repr_mentions_category():
    error = TpmError(ErrorCategory.INPUT_ERROR, "x")
    assert "INPUT_ERROR" in repr(error)