"""Tests for the Document facade and its stream-level guarantees."""

import pytest

import ansigrid
from ansigrid import (
    AllocationFailure,
    Attributes,
    Cell,
    Color,
    Config,
    DiagnosticKind,
    Document,
    DocumentClosed,
    ParserState,
)
from ansigrid.codec.params import ParameterAccumulator
from ansigrid.core.grid import Row

STREAM = (
    b"\x1b[2J\x1b[1;1H\x1b[1;31mBBS\x1b[0m ansi\r\n"
    b"\x1b[44m \x1b[33;1m\xdb\xdb\xb2\xb1\x1b[0m\x1b[3C|\x1b[5Z\r\n"
    b"\tTab\x08\x08x\x1b[2A\x1b[10Gup\x1b[?7h\x1b[38;5;9mz\x1b[70000m!"
    b"\x1b[5;2H\x1b[4;7m@"
    b"\x1a"
    b"SAUCE00trailer\x1b[31m"
)


def snapshot(doc: Document) -> tuple:
    """Everything observable about a document, for comparisons."""
    return (
        list(doc.rows()),
        doc.cursor,
        doc.attributes,
        doc.state,
        doc.diagnostics,
        doc.trailer,
    )


def feed_in_chunks(data: bytes, cuts: list[int], **config) -> Document:
    doc = Document(Config(**config))
    start = 0
    for cut in cuts + [len(data)]:
        doc.write(data[start:cut])
        start = cut
    return doc


class TestChunking:
    """Splitting a stream across writes never changes the result."""

    @pytest.mark.parametrize("width", [0, 12])
    def test_every_single_split(self, width: int) -> None:
        expected = snapshot(feed_in_chunks(STREAM, [], screen_width=width))
        for cut in range(len(STREAM) + 1):
            assert snapshot(feed_in_chunks(STREAM, [cut], screen_width=width)) == expected, cut

    def test_byte_at_a_time(self) -> None:
        expected = snapshot(feed_in_chunks(STREAM, []))
        assert snapshot(feed_in_chunks(STREAM, list(range(1, len(STREAM))))) == expected

    @pytest.mark.parametrize("cuts", [[3, 4, 5], [10, 30, 31, 60], [1, 2, 80, 81, 82]])
    def test_multiple_splits(self, cuts: list[int]) -> None:
        assert snapshot(feed_in_chunks(STREAM, cuts)) == snapshot(feed_in_chunks(STREAM, []))

    def test_empty_writes(self) -> None:
        doc = Document(Config())
        doc.write(b"")
        doc.write(b"\x1b[")
        doc.write(b"")
        doc.write(b"1mA")
        assert doc.get(0, 0).attrs.bold is True


class TestStreamProperties:
    """Behaviour of whole streams."""

    def test_wrap_correctness(self) -> None:
        doc = ansigrid.create(Config(screen_width=10), b"x" * 11)
        assert doc.get(0, 1).code == ord('x')
        assert doc.row_width(0) == 10
        assert doc.height == 2

    def test_no_wrap_when_unbounded(self) -> None:
        doc = ansigrid.create(Config(screen_width=0), b"x" * 500)
        assert doc.height == 1
        assert doc.row_width(0) == 500

    def test_growth_correctness(self) -> None:
        doc = ansigrid.create(Config(screen_width=0), b"\x1b[1001GZ")
        assert doc.get(1000, 0).code == ord('Z')
        assert all(doc.get(x, 0) == Cell() for x in range(1000))

    def test_screen_lines_does_not_clamp(self) -> None:
        doc = ansigrid.create(Config(screen_lines=2), b"a\r\nb\r\nc\r\nd")
        assert doc.height == 4

    def test_cursor_clamp(self) -> None:
        doc = ansigrid.create(Config(), b"\x1b[A" * 10 + b"\x08" * 10)
        assert doc.cursor == (0, 0)

    def test_idempotent_reset(self) -> None:
        for prior in (b"", b"\x1b[1;4;5;7;31;46m", b"\x1b[53;60;73m"):
            doc = ansigrid.create(Config(), prior + b"\x1b[m")
            assert doc.attributes == Attributes()
            assert doc.attributes.fg is Color.WHITE

    def test_attribute_snapshot(self) -> None:
        doc = ansigrid.create(Config(), b"\x1b[1mA\x1b[22mB")
        assert doc.get(0, 0).attrs.bold is True
        assert doc.get(1, 0).attrs.bold is False

    def test_recoverable_error_scenario(self) -> None:
        doc = ansigrid.create(Config(), b"\x1b[32mA\x1b[1;2qB\x1b[4mC")
        assert doc.get(0, 0).attrs.fg is Color.GREEN
        assert doc.get(2, 0).attrs == Attributes(fg=Color.GREEN, underline=True)
        assert [d.kind for d in doc.diagnostics] == [DiagnosticKind.UNSUPPORTED]

    def test_end_of_stream_marker(self) -> None:
        body = b"\x1b[1;36mhello\r\n\x1b[0mworld"
        trailer = b"SAUCE00\x1b[31mjunk\r\nmore\x1a"
        full = ansigrid.create(Config(), body + b"\x1a" + trailer)
        truncated = ansigrid.create(Config(), body)
        assert list(full.rows()) == list(truncated.rows())
        assert full.cursor == truncated.cursor
        assert full.eof and not truncated.eof
        assert full.trailer == trailer
        assert full.state is ParserState.DONE


class TestDocument:
    """Tests for Document lifecycle and accessors."""

    def test_create_without_config_uses_80_columns(self) -> None:
        doc = ansigrid.create()
        assert doc.config.screen_width == 80
        doc.write(b"x" * 81)
        assert doc.height == 2

    def test_create_with_initial_bytes(self) -> None:
        doc = Document.create(Config(), b"abc")
        assert doc.render_to_text() == "abc"

    def test_empty_document(self) -> None:
        doc = Document(Config())
        assert doc.height == 0
        assert doc.width == 0
        assert doc.state is ParserState.NORMAL
        assert doc.attributes == Attributes()
        assert doc.trailer == b""

    def test_accessors(self) -> None:
        doc = ansigrid.create(Config(), b"ab\r\n\x1b[2Cc")
        assert doc.height == 2
        assert doc.width == 3
        assert doc.row_width(1) == 3
        assert doc[2, 1].code == ord('c')
        assert doc.row(1)[2].code == ord('c')

    def test_on_diagnostic_callback(self) -> None:
        seen = []
        doc = ansigrid.create(Config(), b"\x1b[2J\x1b[9Z", on_diagnostic=seen.append)
        assert seen == doc.diagnostics
        assert [d.kind for d in seen] == [DiagnosticKind.IGNORED, DiagnosticKind.UNSUPPORTED]
        assert doc.diagnostics_of(DiagnosticKind.IGNORED) == seen[:1]

    def test_close_releases_storage(self) -> None:
        doc = ansigrid.create(Config(), b"abc\x1axyz")
        ansigrid.destroy(doc)
        assert doc.closed
        assert doc.height == 0
        assert doc.grid.capacity == 0
        assert doc.trailer == b""
        with pytest.raises(DocumentClosed):
            ansigrid.write(doc, b"more")

    def test_context_manager(self) -> None:
        with Document(Config()) as doc:
            doc.write(b"abc")
            assert doc.height == 1
        assert doc.closed

    def test_strict_document(self) -> None:
        doc = Document(Config(strict=True))
        with pytest.raises(ansigrid.UnsupportedSequence):
            doc.write(b"A\x1b[5Z")
        doc.write(b"B")
        assert doc.render_to_text() == "AB"
        assert len(doc.diagnostics) == 1

    def test_allocation_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        doc = ansigrid.create(Config(), b"AB")

        def fail(self, x: int) -> None:
            raise MemoryError

        with monkeypatch.context() as m:
            m.setattr(Row, "reserve", fail)
            with pytest.raises(AllocationFailure):
                doc.write(b"C")

        assert doc.get(0, 0).code == ord('A')
        assert doc.get(1, 0).code == ord('B')
        assert doc.row_width(0) == 2
        doc.write(b"D")
        assert doc.render_to_text() == "ABD"

    def test_allocation_failure_in_parameters(self, monkeypatch: pytest.MonkeyPatch) -> None:
        doc = ansigrid.create(Config(), b"AB")

        def fail(self, final: bool = False) -> None:
            raise MemoryError

        with monkeypatch.context() as m:
            m.setattr(ParameterAccumulator, "flush", fail)
            with pytest.raises(AllocationFailure):
                doc.write(b"\x1b[2;2H")
            assert doc.state is ParserState.NORMAL

        assert doc.diagnostics == []
        doc.write(b"C\x1b[2;1HD")
        assert doc.render_to_text() == "ABC\nD"

    def test_close_mid_sequence(self) -> None:
        doc = ansigrid.create(Config(), b"abc\x1b[12;34")
        assert doc.state is ParserState.IN_SEQUENCE
        doc.close()
        assert doc._decoder.params.values == []
        assert doc._decoder.params.pending is False

    def test_diagnostics_not_kept(self) -> None:
        seen = []
        doc = ansigrid.create(
            Config(), b"\x1b[Z" * 1000 + b"A",
            on_diagnostic=seen.append, keep_diagnostics=False,
        )
        assert len(seen) == 1000
        assert doc.diagnostics == []
        assert doc.render_to_text() == "A"
