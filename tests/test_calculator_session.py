import pytest

from calculator_config import CalculatorConfig
from calculator_engine import CalculatorEngine
from calculator_session import CalculatorSession, HistoryEntry, SessionState


@pytest.fixture
def session():
    return CalculatorSession()


def type_tokens(session, *tokens):
    for token in tokens:
        session.handle_input(token)


class TestEditing:
    def test_append_builds_expression(self, session):
        type_tokens(session, "1", "2", "+", "3")
        assert session.expression == "12+3"
        assert session.state is SessionState.IDLE

    def test_preview_follows_digits_and_close_paren(self, session):
        type_tokens(session, "2", "+", "3")
        assert session.preview == "5"
        session.handle_input("×")
        assert session.preview == ""
        type_tokens(session, "(", "1", "+", "1", ")")
        assert session.expression == "2+3×(1+1)"
        assert session.preview == "8"

    def test_preview_swallows_failures(self, session):
        type_tokens(session, "1", "÷", "0")
        assert session.preview == ""
        assert session.state is SessionState.IDLE
        type_tokens(session, "(", "5")
        assert session.preview == ""

    def test_delete_last_removes_one_character(self, session):
        type_tokens(session, "1", "2", "+", "3")
        session.delete_last()
        assert session.expression == "12+"
        assert session.preview == ""
        session.delete_last()
        assert session.expression == "12"
        assert session.preview == "12"

    def test_clear_resets_everything(self, session):
        type_tokens(session, "9", "×", "9")
        session.calculate()
        session.clear()
        assert (session.expression, session.result, session.preview) == ("", "", "")
        assert session.state is SessionState.IDLE
        assert len(session.history) == 1


class TestMacros:
    def test_square_wraps_buffer(self, session):
        type_tokens(session, "1", "+", "2", "x²")
        assert session.expression == "(1+2)^2"
        assert session.preview == "9"
        session.calculate()
        assert session.result == "9"

    def test_square_on_empty_buffer_keeps_it_empty(self, session):
        session.handle_input("x²")
        assert session.expression == ""

    def test_power_appends_caret(self, session):
        type_tokens(session, "2", "xʸ", "1", "0")
        assert session.expression == "2^10"
        assert session.preview == "1024"

    def test_reciprocal(self, session):
        session.handle_input("1/x")
        assert session.expression == "1/("
        session.clear()
        type_tokens(session, "4", "1/x")
        assert session.expression == "1/(4)"
        assert session.preview == "0.25"

    def test_sign_toggle(self, session):
        session.handle_input("+/-")
        assert session.expression == "-"
        session.clear()
        type_tokens(session, "3", "+", "2", "+/-")
        assert session.expression == "-(3+2)"
        assert session.preview == "-5"

    def test_square_root_and_modulo(self, session):
        type_tokens(session, "√", "9", ")")
        assert session.expression == "√(9)"
        assert session.preview == "3"
        session.clear()
        type_tokens(session, "1", "0", "Mod", "4")
        assert session.expression == "10Mod4"
        assert session.preview == "2"


class TestCommit:
    def test_successful_commit_shows_result_and_records_history(self, session):
        type_tokens(session, "2", "+", "2")
        session.calculate()
        assert session.result == "4"
        assert session.preview == ""
        assert session.state is SessionState.SHOWING_RESULT
        assert len(session.history) == 1
        entry = session.history[0]
        assert isinstance(entry, HistoryEntry)
        assert (entry.expression, entry.result) == ("2+2", "4")

    def test_commit_on_empty_buffer_is_noop(self, session):
        session.calculate()
        assert session.result == ""
        assert session.state is SessionState.IDLE
        assert session.history == ()

    def test_failed_commit_shows_localized_error(self):
        session = CalculatorSession(config=CalculatorConfig(language="or"))
        type_tokens(session, "1", "÷", "0")
        session.calculate()
        assert session.state is SessionState.SHOWING_ERROR
        assert session.result == "ତ୍ରୁଟି"
        assert session.expression == "1÷0"
        assert session.history == ()

    def test_syntax_and_math_errors_share_the_label(self, session):
        type_tokens(session, "(", "5")
        session.calculate()
        syntax_label = session.result
        session.clear()
        type_tokens(session, "1", "÷", "0")
        session.calculate()
        assert session.result == syntax_label == "Error"

    def test_history_is_newest_first(self, session):
        for digit in "123":
            type_tokens(session, digit, "+", "1")
            session.calculate()
            session.clear()
        assert [e.expression for e in session.history] == ["3+1", "2+1", "1+1"]
        assert len({e.id for e in session.history}) == 3

    @pytest.mark.parametrize("limit", [20, 50])
    def test_history_never_exceeds_cap(self, limit):
        session = CalculatorSession(config=CalculatorConfig(history_limit=limit))
        for i in range(limit + 15):
            session.clear()
            type_tokens(session, *str(i), "+", "0")
            session.calculate()
            assert len(session.history) <= limit
        assert len(session.history) == limit
        assert session.history[0].expression == f"{limit + 14}+0"
        assert session.history[-1].expression == "15+0"

    def test_clear_history(self, session):
        type_tokens(session, "1", "+", "1")
        session.calculate()
        session.clear_history()
        assert session.history == ()
        assert session.result == "2"

    def test_load_history_item(self, session):
        type_tokens(session, "6", "×", "7")
        session.calculate()
        entry = session.history[0]
        session.clear()
        session.load_history_item(entry)
        assert session.expression == "6×7"
        assert session.result == ""
        assert session.preview == "42"
        assert session.state is SessionState.IDLE


class TestAfterResult:
    @pytest.fixture
    def shown(self, session):
        type_tokens(session, "2", "+", "3")
        session.calculate()
        return session

    def test_operator_continues_from_result(self, shown):
        type_tokens(shown, "×", "2")
        assert shown.expression == "5×2"
        assert shown.state is SessionState.IDLE
        assert shown.result == ""
        assert shown.preview == "10"

    def test_digit_starts_fresh_expression(self, shown):
        shown.handle_input("7")
        assert shown.expression == "7"
        assert shown.state is SessionState.IDLE
        assert shown.result == ""

    def test_square_macro_applies_to_result(self, shown):
        shown.handle_input("x²")
        assert shown.expression == "(5)^2"
        assert shown.preview == "25"

    def test_square_root_starts_fresh(self, shown):
        shown.handle_input("√")
        assert shown.expression == "√("

    def test_delete_last_keeps_result_state(self, shown):
        shown.delete_last()
        assert shown.expression == "2+"
        assert shown.state is SessionState.SHOWING_RESULT
        assert shown.result == "5"

    def test_negative_result_is_grouped_before_continuing(self, session):
        type_tokens(session, "5", "-", "8")
        session.calculate()
        type_tokens(session, "xʸ", "2")
        assert session.expression == "(-3)^2"
        session.calculate()
        assert session.result == "9"

    def test_negative_result_continues_with_operator(self, session):
        type_tokens(session, "5", "-", "8")
        session.calculate()
        type_tokens(session, "^", "2")
        assert session.expression == "(-3)^2"
        assert session.preview == "9"


class TestAfterError:
    @pytest.fixture
    def failed(self, session):
        type_tokens(session, "1", "÷", "0")
        session.calculate()
        return session

    def test_delete_last_clears_entirely(self, failed):
        failed.delete_last()
        assert failed.expression == ""
        assert failed.result == ""
        assert failed.state is SessionState.IDLE

    def test_append_replaces_buffer(self, failed):
        failed.handle_input("8")
        assert failed.expression == "8"
        assert failed.result == ""
        assert failed.state is SessionState.IDLE
        assert failed.preview == "8"

    def test_operator_does_not_continue_from_error_label(self, failed):
        failed.handle_input("+")
        assert failed.expression == "+"

    def test_recommit_fails_again(self, failed):
        failed.calculate()
        assert failed.state is SessionState.SHOWING_ERROR
        assert failed.expression == "1÷0"

    def test_error_label_follows_language_switch(self):
        session = CalculatorSession(config=CalculatorConfig(language="or"))
        type_tokens(session, "1", "÷", "0")
        session.calculate()
        assert session.result == "ତ୍ରୁଟି"
        session.config.language = "en"
        assert session.result == "Error"
        session.config.language = "es"
        assert session.result == "Error"


def test_session_accepts_injected_engine():
    engine = CalculatorEngine(scientific=False)
    session = CalculatorSession(engine=engine)
    type_tokens(session, "sin(", "0", ")")
    session.calculate()
    assert session.state is SessionState.SHOWING_ERROR


def test_sessions_do_not_share_state():
    first = CalculatorSession()
    second = CalculatorSession()
    type_tokens(first, "1", "+", "1")
    first.calculate()
    assert second.history == ()
    assert second.expression == ""
