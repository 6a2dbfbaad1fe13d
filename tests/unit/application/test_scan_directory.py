"""Tests for ScanDirectoryUseCase."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from subscout.application.use_cases.resolve_identity import IdentityResolver
from subscout.application.use_cases.scan_directory import ScanDirectoryUseCase
from subscout.domain.entities.media import CatalogEntry, JobStatus


@pytest.fixture()
def scanner() -> ScanDirectoryUseCase:
    return ScanDirectoryUseCase(IdentityResolver())


class TestScan:
    async def test_collects_media_recursively(
        self,
        scanner: ScanDirectoryUseCase,
        make_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        make_file("b/Movie.B.mkv", size=10)
        make_file("a/Movie.A.MP4", size=10)
        make_file("a/Movie.A.en.srt", content="1")
        make_file("a/notes.txt", content="x")
        make_file("a/Movie.A.nfo", content="tt0000001")

        result = await scanner.scan(tmp_path)

        assert result.video_files == [
            tmp_path / "a" / "Movie.A.MP4",
            tmp_path / "b" / "Movie.B.mkv",
        ]
        assert result.subtitle_files == [tmp_path / "a" / "Movie.A.en.srt"]

    async def test_empty_directory(
        self, scanner: ScanDirectoryUseCase, tmp_path: Path
    ) -> None:
        result = await scanner.scan(tmp_path)
        assert result.video_files == []
        assert result.subtitle_files == []

    async def test_not_a_directory(
        self,
        scanner: ScanDirectoryUseCase,
        make_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        with pytest.raises(NotADirectoryError):
            await scanner.scan(make_file("file.mkv", size=1))
        with pytest.raises(NotADirectoryError):
            await scanner.scan(tmp_path / "missing")


class TestCreateJobs:
    async def test_pairs_and_leftovers(
        self,
        scanner: ScanDirectoryUseCase,
        make_video: Callable[..., Path],
        make_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        make_video("Some.Movie.2020.1080p.mkv")
        make_file("Some.Movie.2020.1080p.en.srt", content="1")
        make_file("Other.Film.fr.srt", content="2")

        jobs = await scanner.create_jobs(tmp_path)

        assert len(jobs) == 2
        paired, standalone = jobs
        assert paired.video is not None
        assert paired.video.file_name == "Some.Movie.2020.1080p.mkv"
        assert paired.subtitle.language == "en"
        assert paired.status is JobStatus.PENDING
        assert standalone.video is None
        assert standalone.subtitle.language == "fr"

    async def test_each_subtitle_used_once(
        self,
        scanner: ScanDirectoryUseCase,
        make_video: Callable[..., Path],
        make_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        make_video("a/Show.S01E01.mkv")
        make_video("b/Show.S01E01.mkv")
        make_file("a/Show.S01E01.en.srt", content="1")

        jobs = await scanner.create_jobs(tmp_path)

        assert len(jobs) == 1
        assert jobs[0].video is not None
        assert jobs[0].video.file_path == str(tmp_path / "a" / "Show.S01E01.mkv")

    async def test_unknown_language_skipped(
        self,
        scanner: ScanDirectoryUseCase,
        make_video: Callable[..., Path],
        make_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        make_video("Some.Movie.mkv")
        make_file("Some.Movie.srt", content="1")

        assert await scanner.create_jobs(tmp_path) == []

    async def test_failed_pair_does_not_stop_scan(
        self,
        scanner: ScanDirectoryUseCase,
        make_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        make_file("One.en.srt", content="1")
        make_file("Two.de.srt", content="2")

        original = scanner._resolver.build_subtitle_info

        async def _flaky(path: str | Path) -> object:
            if Path(path).name == "One.en.srt":
                raise PermissionError("denied")
            return await original(path)

        with patch.object(scanner._resolver, "build_subtitle_info", side_effect=_flaky):
            jobs = await scanner.create_jobs(tmp_path)

        assert [job.subtitle.file_name for job in jobs] == ["Two.de.srt"]

    async def test_unexpected_error_propagates(
        self,
        scanner: ScanDirectoryUseCase,
        make_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        make_file("One.en.srt", content="1")

        with patch.object(
            scanner._resolver, "build_subtitle_info", side_effect=ValueError("bug")
        ):
            with pytest.raises(ValueError, match="bug"):
                await scanner.create_jobs(tmp_path)

    async def test_cancellation_aborts_run(
        self,
        catalog: AsyncMock,
        make_video: Callable[..., Path],
        make_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        make_video("Some.Movie.2020.1080p.mkv")
        make_file("Some.Movie.2020.1080p.en.srt", content="1")
        make_file("Other.Film.fr.srt", content="2")
        catalog.search_catalog.side_effect = asyncio.CancelledError()
        scanner = ScanDirectoryUseCase(IdentityResolver(catalog=catalog))

        with pytest.raises(asyncio.CancelledError):
            await scanner.create_jobs(tmp_path)
        catalog.search_catalog.assert_awaited_once()

    async def test_slow_pair_skipped_after_timeout(
        self,
        catalog: AsyncMock,
        make_video: Callable[..., Path],
        make_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        make_video("Some.Movie.2020.1080p.mkv")
        make_file("Some.Movie.2020.1080p.en.srt", content="1")
        make_file("Other.Film.fr.srt", content="2")

        async def _slow(*_args: object) -> list[CatalogEntry]:
            await asyncio.sleep(10)
            return []

        catalog.search_catalog.side_effect = _slow
        scanner = ScanDirectoryUseCase(
            IdentityResolver(catalog=catalog), pair_timeout=0.5
        )

        jobs = await scanner.create_jobs(tmp_path)

        assert [job.subtitle.file_name for job in jobs] == ["Other.Film.fr.srt"]
        assert jobs[0].video is None
