import pytest

from dftp_client.core.codes import STATUS_TYPE_BY_CODE, ReplyCode, StatusType, TransferType, is_success


@pytest.mark.parametrize("code", ["123", "222", "150", "226"])
def test_code_of_length_3_starting_with_1_or_2_is_success(code):
    assert is_success(code)


@pytest.mark.parametrize("code", ["12", "2", "", "321", "426", "550", "2000"])
def test_other_codes_are_not_success(code):
    assert not is_success(code)


def test_reply_codes_compare_equal_to_their_digits():
    assert ReplyCode.ENTERING_PASSIVE_MODE == "227"
    assert ReplyCode.USER_LOGGED_IN == "230"
    assert ReplyCode.NEED_PASSWORD == "331"
    assert str(ReplyCode.PATH_CREATED) == "257"
    assert "999" not in {code.value for code in ReplyCode}


def test_status_codes_map_to_status_types():
    assert STATUS_TYPE_BY_CODE["211"] is StatusType.GENERAL
    assert STATUS_TYPE_BY_CODE["212"] is StatusType.DIRECTORY
    assert STATUS_TYPE_BY_CODE["213"] is StatusType.FILE


def test_transfer_type_symbols():
    assert TransferType.ASCII.symbol == "A"
    assert TransferType.BINARY.symbol == "I"
