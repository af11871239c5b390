import io

from cdsmodel.bugmessage import BugMessage


def test_message_format():
    assert BugMessage("data race").msg == "  [BUG] data race\n"


def test_str_is_message():
    message = BugMessage("deadlock")
    assert str(message) == message.msg
    assert message.msg.startswith("  [BUG] ")
    assert message.msg.endswith("deadlock\n")


def test_print_to_stream():
    stream = io.StringIO()
    BugMessage("uninitialized load").print(stream)
    BugMessage("second").print(stream)
    assert stream.getvalue() == "  [BUG] uninitialized load\n  [BUG] second\n"


def test_print_defaults_to_stdout(capsys):
    BugMessage("x").print()
    assert capsys.readouterr().out == "  [BUG] x\n"