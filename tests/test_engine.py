"""批量处理引擎测试。

测试输入收集、进度跟踪、归档组装和批量处理驱动。
"""

import logging
import zipfile
from io import BytesIO

import pytest

from image_zipper.engine.archive import ArchiveAssembler, write_archive
from image_zipper.engine.batch import BatchProcessor
from image_zipper.engine.collector import InputCollector
from image_zipper.engine.progress import ProgressTracker
from image_zipper.exceptions import ArchiveIOError, DecodeError, ValidationError
from image_zipper.models import ImageInput, TransformConfig
from tests.conftest import create_input, open_image


class TestInputCollector:
    """输入收集器测试"""

    def test_keeps_insertion_order(self):
        collector = InputCollector()
        assert collector.add("b.png", b"1")
        assert collector.add("a.jpg", b"22")

        assert collector.names == ["b.png", "a.jpg"]
        assert [image.size for image in collector] == [1, 2]

    def test_rejects_unsupported_extension(self):
        collector = InputCollector()
        assert not collector.add("notes.txt", b"text")
        assert not collector.add("noextension", b"data")
        assert len(collector) == 0

    def test_extension_check_is_case_insensitive(self):
        collector = InputCollector()
        assert collector.add("PHOTO.JPEG", b"x")

    def test_duplicate_names_skipped(self):
        collector = InputCollector()
        assert collector.add("photo.png", b"first")
        assert not collector.add("photo.png", b"second")

        assert len(collector) == 1
        assert collector.images[0].content == b"first"

    def test_rejected_names_recorded(self):
        collector = InputCollector()
        collector.add("a.png", b"1")
        collector.add("b.gif", b"2")
        collector.add("a.png", b"3")

        assert collector.names == ["a.png"]
        assert collector.rejected == ["b.gif", "a.png"]

        collector.clear()
        assert collector.rejected == []

    def test_custom_extensions(self):
        collector = InputCollector(accepted_extensions=[".HEIC"])
        assert collector.add("photo.heic", b"x")
        assert not collector.add("photo.png", b"x")

    def test_add_paths_expands_directory(self, image_dir):
        collector = InputCollector()
        added = collector.add_paths([image_dir])

        assert added == 2
        assert collector.names == ["a.jpg", "b.png"]

    def test_add_missing_path(self, tmp_path):
        collector = InputCollector()
        with pytest.raises(ValidationError):
            collector.add_path(tmp_path / "missing.png")

    def test_clear(self):
        collector = InputCollector()
        collector.add("photo.png", b"x")
        collector.clear()

        assert len(collector) == 0
        assert collector.add("photo.png", b"x")


class TestProgressTracker:
    """进度跟踪测试"""

    def test_callback_sequence(self):
        events = []
        tracker = ProgressTracker(lambda current, total: events.append((current, total)))

        tracker.start(2)
        tracker.advance()
        tracker.advance()

        assert events == [(0, 2), (1, 2), (2, 2)]
        assert tracker.state.percent == 100.0

    def test_cannot_exceed_total(self):
        tracker = ProgressTracker()
        tracker.start(1)
        tracker.advance()

        with pytest.raises(RuntimeError):
            tracker.advance()

    def test_reset(self):
        tracker = ProgressTracker()
        tracker.start(3)
        assert tracker.is_active

        tracker.reset()
        assert tracker.state is None
        assert not tracker.is_active


class TestArchiveAssembler:
    """归档组装测试"""

    def test_entries_at_root(self):
        assembler = ArchiveAssembler()
        assembler.add("a.webp", b"aaa")
        assembler.add("nested/b.webp", b"bbb")
        content = assembler.finalize()

        with zipfile.ZipFile(BytesIO(content)) as archive:
            assert archive.namelist() == ["a.webp", "b.webp"]
            assert archive.read("a.webp") == b"aaa"
            assert all(
                info.compress_type == zipfile.ZIP_DEFLATED
                for info in archive.infolist()
            )

    def test_name_collision_gets_suffix(self):
        assembler = ArchiveAssembler()
        assert assembler.add("photo.webp", b"1") == "photo.webp"
        assert assembler.add("photo.webp", b"2") == "photo_1.webp"

        with zipfile.ZipFile(BytesIO(assembler.finalize())) as archive:
            assert archive.read("photo.webp") == b"1"
            assert archive.read("photo_1.webp") == b"2"

    def test_finalize_is_idempotent(self):
        assembler = ArchiveAssembler()
        assembler.add("a.png", b"a")
        assert assembler.finalize() == assembler.finalize()
        assert assembler.is_finalized

    def test_add_after_finalize(self):
        assembler = ArchiveAssembler()
        assembler.finalize()

        with pytest.raises(ArchiveIOError):
            assembler.add("late.png", b"x")

    def test_failed_finalize_keeps_original_error(self, monkeypatch):
        """完成归档失败后放弃归档不会再次关闭"""
        assembler = ArchiveAssembler()
        assembler.add("a.png", b"a")
        close_calls = []

        def broken_close():
            close_calls.append(True)
            raise OSError("disk full")

        monkeypatch.setattr(assembler._zip, "close", broken_close)

        with pytest.raises(ArchiveIOError, match="disk full"):
            assembler.finalize()
        assembler.discard()

        assert close_calls == [True]

    def test_discard_after_partial_add(self):
        assembler = ArchiveAssembler()
        assembler.add("a.png", b"a")
        assembler.discard()
        assembler.discard()

        assert not assembler.is_finalized

    def test_write_archive_creates_parents(self, tmp_path):
        target = tmp_path / "public" / "output" / "images.zip"
        write_archive(b"first", target)
        write_archive(b"second", target)

        assert target.read_bytes() == b"second"

    def test_write_archive_failure(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(ArchiveIOError):
            write_archive(b"data", blocker / "images.zip")


class TestBatchProcessor:
    """批量处理驱动测试"""

    def test_process_batch(self, sample_inputs):
        events = []
        processor = BatchProcessor(lambda current, total: events.append((current, total)))
        config = TransformConfig(output_format="webp", max_length=120)

        result = processor.process(sample_inputs, config)

        assert result.get_file_count() == len(sample_inputs)
        assert [record.name for record in result.file_sizes] == [
            "landscape.webp",
            "portrait.webp",
            "transparent.webp",
        ]
        assert events == [(0, 3), (1, 3), (2, 3), (3, 3)]
        assert processor.progress.state is None

    def test_size_totals_are_exact(self, sample_inputs):
        result = BatchProcessor().process(
            sample_inputs, TransformConfig(output_format="png")
        )

        assert result.total_original_size == sum(i.size for i in sample_inputs)
        assert result.total_processed_size == sum(
            r.processed_size for r in result.file_sizes
        )
        assert result.zip_size == len(result.zip_content)

        with zipfile.ZipFile(BytesIO(result.zip_content)) as archive:
            for record in result.file_sizes:
                assert archive.getinfo(record.name).file_size == record.processed_size

    def test_resized_in_archive(self, sample_inputs):
        result = BatchProcessor().process(
            sample_inputs, TransformConfig(output_format="jpeg", max_length=100)
        )

        with zipfile.ZipFile(BytesIO(result.zip_content)) as archive:
            with open_image(archive.read("landscape.jpeg")) as img:
                assert img.size == (100, 50)
            with open_image(archive.read("portrait.jpeg")) as img:
                assert img.size == (50, 100)

    def test_colliding_output_names(self):
        images = [create_input("photo.png"), create_input("photo.jpg", format="JPEG")]
        result = BatchProcessor().process(images, TransformConfig(output_format="webp"))

        assert [r.name for r in result.file_sizes] == ["photo.webp", "photo_1.webp"]

    def test_one_bad_input_fails_whole_batch(self, sample_inputs):
        events = []
        processor = BatchProcessor(lambda current, total: events.append((current, total)))
        images = [
            sample_inputs[0],
            ImageInput(name="broken.png", content=b"garbage"),
            sample_inputs[1],
        ]

        with pytest.raises(DecodeError) as exc_info:
            processor.process(images, TransformConfig(output_format="webp"))

        assert exc_info.value.file_name == "broken.png"
        # 失败前只推进到第一张
        assert events == [(0, 3), (1, 3)]
        assert processor.progress.state is None

    def test_failure_logged_once_at_error(self, caplog):
        """一次失败只记录一条 ERROR 日志"""
        images = [ImageInput(name="broken.png", content=b"garbage")]

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(DecodeError):
                BatchProcessor().process(images, TransformConfig())

        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert "broken.png" in errors[0].getMessage()

    def test_empty_batch(self):
        result = BatchProcessor().process([], TransformConfig())

        assert result.get_file_count() == 0
        assert result.total_original_size == 0
        with zipfile.ZipFile(BytesIO(result.zip_content)) as archive:
            assert archive.namelist() == []
