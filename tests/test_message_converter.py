"""Tests for MessageConverter."""

import io
import logging
import mailbox

import pytest

from conftest import STAMP_LENGTH, build_message, text_body
from lafite2mbox.models.conversion_result import IssueType, Severity
from lafite2mbox.models.debug import DebugCategory
from lafite2mbox.services.lafite.base import MalformedStampError, MissingStartMarkerError
from lafite2mbox.services.lafite.framed_reader import FramedReader
from lafite2mbox.services.lafite.message_converter import MessageConverter

FROM_LINE = b"From lafite2mbox Thu Jan 02 03:04:05 2025\n"


@pytest.fixture
def converter(fixed_clock):
    """Create a MessageConverter with a fixed clock."""
    return MessageConverter(clock=fixed_clock)


def convert_bytes(converter, data):
    output = io.BytesIO()
    result = converter.convert(io.BytesIO(data), output)
    return result, output.getvalue()


class TestTextMessages:
    """Test conversion of text messages."""

    def test_single_text_message(self, converter):
        """Test headers, content type and body of a text message."""
        data = build_message(
            ["Date: 5 Mar 85 10:00 PST", "From: Smith.pa", "Subject: Lunch"],
            text_body("Meet at noon?", "", "-- S"),
        )
        result, output = convert_bytes(converter, data)

        assert result.success
        assert result.messages_converted == 1
        assert output == (
            FROM_LINE
            + b"Date: 5 Mar 85 10:00 PST\n"
            + b"From: Smith.pa\n"
            + b"Subject: Lunch\n"
            + b"Content-Type: text/plain; charset=x-xerox-xccs\n"
            + b"\n"
            + b"Meet at noon?\n"
            + b"\n"
            + b"-- S\n"
        )

    def test_missing_format_defaults_to_text(self, converter):
        """Test absent Format: header gives the plain text content type."""
        data = build_message(["Subject: x"], text_body("body"))
        _, output = convert_bytes(converter, data)

        assert b"Content-Type: text/plain; charset=x-xerox-xccs\n" in output

    def test_format_text_header_is_dropped(self, converter):
        """Test the Format: header itself is not copied."""
        data = build_message(["Subject: x", "Format: Text"], text_body("body"))
        _, output = convert_bytes(converter, data)

        assert b"Format:" not in output
        assert b"Content-Type: text/plain; charset=x-xerox-xccs\n" in output
        assert output.endswith(b"\nbody\n")

    def test_lf_terminated_input(self, converter):
        """Test linefeed terminators are handled like carriage returns."""
        data = build_message(["Subject: x"], b"line one\nline two\n", terminator=b"\n")
        result, output = convert_bytes(converter, data)

        assert result.success
        assert output.endswith(b"\n\nline one\nline two\n")

    def test_from_lines_escaped(self, converter):
        """Test body lines starting with 'From ' are quoted."""
        data = build_message(["Subject: x"], text_body("From the desk of", "Fromage", "from me"))
        _, output = convert_bytes(converter, data)

        assert b"\n>From the desk of\n" in output
        assert b"\nFromage\n" in output
        assert b"\nfrom me\n" in output

    def test_from_lines_not_escaped_when_disabled(self, fixed_clock):
        """Test escaping can be turned off."""
        converter = MessageConverter(escape_from_lines=False, clock=fixed_clock)
        data = build_message(["Subject: x"], text_body("From the desk of"))
        _, output = convert_bytes(converter, data)

        assert b">From" not in output
        assert output.endswith(b"\nFrom the desk of\n")

    def test_program_name_in_from_line(self, fixed_clock):
        """Test the From line sender is the configured program name."""
        converter = MessageConverter(program_name="interlisp", clock=fixed_clock)
        _, output = convert_bytes(converter, build_message(["Subject: x"], text_body("b")))

        assert output.startswith(b"From interlisp Thu Jan 02 03:04:05 2025\n")

    def test_empty_body(self, converter):
        """Test a message that ends with the blank header separator."""
        result, output = convert_bytes(converter, build_message(["Subject: x"]))

        assert result.success
        assert output.endswith(b"Content-Type: text/plain; charset=x-xerox-xccs\n\n")


class TestBinaryMessages:
    """Test conversion of non-text messages."""

    def test_tedit_body_copied_verbatim(self, converter):
        """Test a TEdit body keeps its bytes, terminators included."""
        body = b"\x00\x01TEdit\rdata\n\xff\r"
        data = build_message(["Subject: doc", "Format: TEdit"], body)
        result, output = convert_bytes(converter, data)

        assert result.success
        assert output.endswith(b"Content-Type: application/vnd.interlisp.tedit\n\n" + body + b"\n")
        assert b"Format" not in output

    @pytest.mark.parametrize("header", ["format: tedit", "FORMAT:   TEDIT", "Format: TEdit"])
    def test_tedit_any_case(self, converter, header):
        """Test Format: TEdit in any case is binary."""
        data = build_message([header], b"binary\r")
        _, output = convert_bytes(converter, data)

        assert b"Content-Type: application/vnd.interlisp.tedit\n" in output
        assert output.endswith(b"\n\nbinary\r\n")

    def test_unknown_format_is_octet_stream(self, converter):
        """Test other formats are binary octet streams."""
        data = build_message(["Format: Sketch"], b"\x10\x20")
        _, output = convert_bytes(converter, data)

        assert b"Content-Type: application/octet-stream\n" in output
        assert output.endswith(b"\n\n\x10\x20\n")

    def test_binary_body_not_from_escaped(self, converter):
        """Test binary bodies are never quoted."""
        data = build_message(["Format: TEdit"], b"From here\r")
        _, output = convert_bytes(converter, data)

        assert output.endswith(b"\n\nFrom here\r\n")

    def test_short_binary_body(self, converter):
        """Test a binary body shorter than declared is an I/O shortfall."""
        body = b"only a little"
        full = build_message(["Format: TEdit"], body)
        data = build_message(["Format: TEdit"], body, message_length=len(full) + 50)
        result, output = convert_bytes(converter, data)

        assert not result.success
        assert result.fatal_issue.issue_type == IssueType.SHORT_READ
        assert result.messages_converted == 0
        assert output == b""


class TestFraming:
    """Test message framing."""

    def test_two_messages(self, converter):
        """Test two consecutive messages give two From lines."""
        data = build_message(["Subject: one"], text_body("first")) + build_message(
            ["Subject: two"], text_body("second")
        )
        result, output = convert_bytes(converter, data)

        assert result.messages_converted == 2
        assert output.count(b"From lafite2mbox ") == 2
        assert [line for line in output.split(b"\n") if line.startswith(b"From ")] == [
            FROM_LINE.rstrip(b"\n")
        ] * 2

    def test_binary_message_followed_by_text_message(self, converter, tmp_path):
        """Test a TEdit body does not swallow the next message's From line."""
        data = build_message(["Subject: one", "Format: TEdit"], b"doc\r") + build_message(
            ["Subject: two"], text_body("second")
        )
        result, output = convert_bytes(converter, data)

        assert result.messages_converted == 2
        assert b"\n\ndoc\r\n" + FROM_LINE in output
        assert [line for line in output.split(b"\n") if line.startswith(b"From ")] == [
            FROM_LINE.rstrip(b"\n")
        ] * 2

        mbox_path = tmp_path / "out.mbox"
        mbox_path.write_bytes(output)
        mbox = mailbox.mbox(str(mbox_path), create=False)
        try:
            assert [message["Subject"] for message in mbox] == ["one", "two"]
        finally:
            mbox.close()

    def test_message_count_matches_markers(self, converter):
        """Test the number of messages equals the number of markers."""
        data = b"".join(
            build_message([f"Subject: {i}"], text_body(f"body {i}", "more")) for i in range(5)
        )
        result, _ = convert_bytes(converter, data)

        assert data.count(b"*start*") == 5
        assert result.messages_converted == 5

    def test_empty_file(self, converter):
        """Test an empty file converts zero messages successfully."""
        result, output = convert_bytes(converter, b"")

        assert result.success
        assert result.messages_converted == 0
        assert output == b""

    def test_repaired_message(self, converter):
        """Test the documented 1659-byte repaired message."""
        headers = ["Subject: Repaired"]
        body = text_body(*["x" * 99] * 16) + text_body("y" * 15)
        data = build_message(headers, body, flags="UUF")

        assert data.startswith(b"*start*\r01659 00024 UUF\r")
        result, output = convert_bytes(converter, data)

        assert result.messages_converted == 1
        header_block = output.split(b"\n\n", 1)[0]
        assert b"X-Message-Repaired: true" in header_block.split(b"\n")

    def test_no_repaired_header_without_flag(self, converter):
        """Test ordinary messages carry no repaired header."""
        _, output = convert_bytes(converter, build_message(["Subject: x"], text_body("b")))

        assert b"X-Message-Repaired" not in output

    def test_undocumented_flag(self, converter):
        """Test an undocumented trailing flag is recorded but not fatal."""
        data = build_message(["Subject: x"], text_body("b"), flags="UU*")
        result, output = convert_bytes(converter, data)

        assert result.success
        assert b"X-Message-Repaired" not in output
        assert [issue.issue_type for issue in result.issues] == [IssueType.UNDOCUMENTED_FLAG]
        assert result.issues[0].severity == Severity.WARNING

    def test_flag_anomalies_are_warnings(self, converter, caplog):
        """Test unusual deleted and seen flags are logged and conversion continues."""
        data = build_message(["Subject: x"], text_body("b"), flags="QR ")
        with caplog.at_level(logging.WARNING):
            result, _ = convert_bytes(converter, data)

        assert result.success
        assert result.messages_converted == 1
        assert {issue.issue_type for issue in result.warnings} == {
            IssueType.DELETED_FLAG_ANOMALY,
            IssueType.SEEN_FLAG_ANOMALY,
        }
        assert "Deleted flag = 'Q'" in caplog.text

    def test_malformed_stamp_emits_nothing(self, converter):
        """Test a bad stamp line aborts the file before any output."""
        data = b"*start*\r1659 00024 UUF\rSubject: x\r\rbody\r"
        result, output = convert_bytes(converter, data)

        assert not result.success
        assert result.fatal_issue.issue_type == IssueType.MALFORMED_STAMP
        assert output == b""

    def test_missing_start_marker(self, converter):
        """Test a file not starting with *start* is rejected."""
        result, output = convert_bytes(converter, b"Subject: x\r\rbody\r")

        assert result.fatal_issue.issue_type == IssueType.MISSING_START_MARKER
        assert output == b""

    def test_failure_after_good_message(self, converter):
        """Test messages before a framing error stay converted."""
        data = build_message(["Subject: ok"], text_body("fine")) + b"garbage\r"
        result, output = convert_bytes(converter, data)

        assert result.messages_converted == 1
        assert result.fatal_issue.issue_type == IssueType.MISSING_START_MARKER
        assert result.fatal_issue.message_index == 1
        assert output.count(b"From lafite2mbox ") == 1

    def test_declared_length_too_short(self, converter):
        """Test an understated length leaves bytes that break the next marker."""
        good = build_message(["Subject: x"], text_body("body text"))
        data = build_message(["Subject: x"], text_body("body text"), message_length=len(good) - 3)
        result, _ = convert_bytes(converter, data)

        assert not result.success
        assert result.fatal_issue.issue_type == IssueType.MISSING_START_MARKER

    def test_truncated_text_message(self, converter):
        """Test end of file inside a text message is a framing error."""
        good = build_message(["Subject: x"], text_body("body"))
        data = build_message(["Subject: x"], text_body("body"), message_length=len(good) + 40)
        result, output = convert_bytes(converter, data)

        assert result.fatal_issue.issue_type == IssueType.TRUNCATED_MESSAGE
        assert output == b""

    def test_stamp_longer_than_message(self, converter):
        """Test a stamp length beyond the message length is an over-read."""
        data = b"*start*\r00010 00024 UU \r"
        result, _ = convert_bytes(converter, data)

        assert result.fatal_issue.issue_type == IssueType.OVER_READ

    def test_conversion_is_repeatable(self, converter):
        """Test converting the same input twice gives identical output."""
        data = build_message(["Subject: a"], text_body("x")) + build_message(
            ["Format: TEdit"], b"\x01\x02\r"
        )
        _, first = convert_bytes(converter, data)
        _, second = convert_bytes(converter, data)

        assert first == second


class TestIterMessages:
    """Test the message iterator."""

    def test_bytes_read_within_bounds(self, converter):
        """Test every message consumes between stamp length and length + 1 bytes."""
        data = build_message(["Subject: a"], text_body("one", "two")) + build_message(
            ["Format: TEdit"], b"\x00\x01\x02"
        )
        messages = list(converter.iter_messages(FramedReader(io.BytesIO(data))))

        assert len(messages) == 2
        for message in messages:
            assert STAMP_LENGTH <= message.bytes_read <= message.stamp.message_length + 1
        assert messages[0].headers == ["Subject: a"]
        assert messages[0].body == ["one", "two"]
        assert messages[1].is_binary
        assert messages[1].body == b"\x00\x01\x02"

    def test_iter_messages_raises_framing_errors(self, converter):
        """Test iterator propagates framing errors."""
        reader = FramedReader(io.BytesIO(b"*start*\rbad stamp\r"))

        with pytest.raises(MalformedStampError):
            list(converter.iter_messages(reader))

    def test_iter_messages_missing_marker(self, converter):
        reader = FramedReader(io.BytesIO(b"\r"))

        with pytest.raises(MissingStartMarkerError):
            list(converter.iter_messages(reader))


class TestDebugTracing:
    """Test diagnostic categories."""

    def test_header_tracing(self, fixed_clock, caplog):
        """Test header tracing logs each header line."""
        converter = MessageConverter(debug=[DebugCategory.HEADERS], clock=fixed_clock)
        data = build_message(["Subject: traced", "Format: TEdit"], b"bin")
        with caplog.at_level(logging.INFO):
            convert_bytes(converter, data)

        assert "Header> 'Subject: traced'" in caplog.text
        assert "Format is tedit" in caplog.text

    def test_body_tracing(self, fixed_clock, caplog):
        """Test body tracing logs each body line."""
        converter = MessageConverter(debug=[DebugCategory.BODY], clock=fixed_clock)
        with caplog.at_level(logging.INFO):
            convert_bytes(converter, build_message(["Subject: x"], text_body("traced body")))

        assert "> 'traced body'" in caplog.text
        assert "Header>" not in caplog.text

    def test_undocumented_flag_tracing(self, fixed_clock, caplog):
        """Test undocumented flags are logged at INFO when traced."""
        converter = MessageConverter(debug=[DebugCategory.UNDOCUMENTED_FLAGS], clock=fixed_clock)
        with caplog.at_level(logging.INFO):
            convert_bytes(converter, build_message(["Subject: x"], flags="UU#"))

        assert "Message 0 has undocumented flag '#'" in caplog.text
        assert "Message 0: Undocumented flag = '#'" in caplog.text

    def test_no_tracing_by_default(self, converter, caplog):
        """Test nothing is traced when no category is enabled."""
        with caplog.at_level(logging.INFO):
            convert_bytes(converter, build_message(["Subject: x"], text_body("quiet"), flags="UU#"))

        assert "Header>" not in caplog.text
        assert "quiet" not in caplog.text
        assert "has undocumented flag" not in caplog.text

    def test_undocumented_flag_warned_without_tracing(self, converter, caplog):
        """Test undocumented flags are logged at WARNING with no category enabled."""
        with caplog.at_level(logging.WARNING):
            convert_bytes(converter, build_message(["Subject: x"], flags="UU#"))

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert [r.getMessage() for r in warnings] == ["Message 0: Undocumented flag = '#'"]

    def test_injected_logger(self, fixed_clock, caplog):
        """Test diagnostics go to the injected logger."""
        logger = logging.getLogger("tests.lafite")
        converter = MessageConverter(logger=logger, clock=fixed_clock)
        with caplog.at_level(logging.INFO, logger="tests.lafite"):
            convert_bytes(converter, build_message(["Subject: x"]))

        assert any(record.name == "tests.lafite" for record in caplog.records)
