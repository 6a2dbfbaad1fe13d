"""Directory scan use case: find media files and turn them into upload jobs."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from subscout.application.use_cases.resolve_identity import IdentityResolver
from subscout.domain.entities.media import JobStatus, UploadJob
from subscout.infrastructure.media.matcher import find_matching_subtitle

log = structlog.get_logger(__name__)

VIDEO_EXTENSIONS = frozenset({".mkv", ".mp4", ".avi", ".mov", ".wmv", ".flv", ".m4v", ".ts"})
SUBTITLE_EXTENSIONS = frozenset({".srt", ".sub", ".ssa", ".ass", ".vtt"})


@dataclass(frozen=True)
class ScanResult:
    """Media files found below a root directory, sorted by path."""

    video_files: list[Path] = field(default_factory=list)
    subtitle_files: list[Path] = field(default_factory=list)


def _walk(root: Path) -> ScanResult:
    videos: list[Path] = []
    subtitles: list[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            ext = os.path.splitext(name)[1].lower()
            if ext in VIDEO_EXTENSIONS:
                videos.append(Path(dirpath) / name)
            elif ext in SUBTITLE_EXTENSIONS:
                subtitles.append(Path(dirpath) / name)
    return ScanResult(video_files=sorted(videos), subtitle_files=sorted(subtitles))


class ScanDirectoryUseCase:
    """Pairs videos with subtitles below a directory and resolves each pair.

    Videos are paired first, each with the first unused matching subtitle;
    subtitles left over become subtitle-only jobs. Pairs whose subtitle
    language cannot be detected are skipped, as are pairs whose files
    cannot be read or whose resolution exceeds *pair_timeout* seconds.
    Cancellation of the caller aborts the whole run.
    """

    def __init__(
        self, resolver: IdentityResolver, *, pair_timeout: float | None = None
    ) -> None:
        self._resolver = resolver
        self._pair_timeout = pair_timeout

    async def scan(self, root: str | Path) -> ScanResult:
        """Recursively collect video and subtitle files below *root*.

        Raises:
            NotADirectoryError: *root* is not a directory.
        """
        root_path = Path(root)
        if not root_path.is_dir():
            raise NotADirectoryError(f"not a directory: {root_path}")

        result = await asyncio.to_thread(_walk, root_path)
        log.info(
            "scan_complete",
            root=str(root_path),
            videos=len(result.video_files),
            subtitles=len(result.subtitle_files),
        )
        return result

    async def create_jobs(self, root: str | Path) -> list[UploadJob]:
        """Scan *root* and return one pending job per usable pair."""
        result = await self.scan(root)
        jobs: list[UploadJob] = []
        used: set[Path] = set()

        for video_path in result.video_files:
            available = [s for s in result.subtitle_files if s not in used]
            subtitle_path = find_matching_subtitle(
                video_path, available, self._resolver.languages
            )
            if subtitle_path is None:
                log.debug("no_matching_subtitle", video=video_path.name)
                continue
            used.add(subtitle_path)
            job = await self._create_job(video_path, subtitle_path)
            if job is not None:
                jobs.append(job)

        for subtitle_path in result.subtitle_files:
            if subtitle_path in used:
                continue
            job = await self._create_job(None, subtitle_path)
            if job is not None:
                jobs.append(job)

        log.info("jobs_created", root=str(root), count=len(jobs))
        return jobs

    async def _create_job(
        self, video_path: Path | None, subtitle_path: Path
    ) -> UploadJob | None:
        try:
            video, subtitle = await asyncio.wait_for(
                self._resolver.resolve(video_path, subtitle_path),
                timeout=self._pair_timeout,
            )
        except asyncio.TimeoutError:
            log.warning(
                "job_resolution_timed_out",
                video=video_path.name if video_path else None,
                subtitle=subtitle_path.name,
                timeout=self._pair_timeout,
            )
            return None
        except OSError:
            log.warning(
                "job_resolution_failed",
                video=video_path.name if video_path else None,
                subtitle=subtitle_path.name,
                exc_info=True,
            )
            return None

        if subtitle is None or not subtitle.language:
            log.info("job_skipped_unknown_language", subtitle=subtitle_path.name)
            return None

        log.info(
            "job_created",
            video=video.file_name if video else None,
            subtitle=subtitle.file_name,
        )
        return UploadJob(subtitle=subtitle, video=video, status=JobStatus.PENDING)
