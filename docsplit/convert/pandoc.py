"""Adapter for converting word-processing documents with the pandoc CLI."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from ..logging import get_logger
from .base import ConversionError


class PandocConverter:
    """Runs pandoc to produce markdown with ATX headings and a metadata block."""

    DEFAULT_ARGS = (
        "--to=markdown",
        "--standalone",
        "--wrap=none",
        "--markdown-headings=atx",
    )

    def __init__(
        self,
        *,
        executable: str | None = None,
        extra_args: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.executable = executable or "pandoc"
        self.extra_args = list(extra_args or [])
        self.timeout = timeout
        self.logger = get_logger("convert.pandoc")

    def build_args(self, source: Path) -> List[str]:
        return [self.executable, str(source), *self.DEFAULT_ARGS, *self.extra_args]

    def convert(self, source: Path) -> List[str]:
        if not source.is_file():
            raise ConversionError(f"Source document not found: {source}")

        args = self.build_args(source)
        self.logger.debug("Running %s", " ".join(args))
        try:
            completed = subprocess.run(
                args,
                check=True,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise ConversionError(
                f"Unable to locate '{self.executable}'. Install pandoc or configure converter.executable."
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ConversionError(f"pandoc timed out after {exc.timeout}s converting {source.name}") from exc
        except subprocess.CalledProcessError as exc:
            message = (exc.stderr or "").strip() or (exc.stdout or "").strip() or str(exc.returncode)
            raise ConversionError(f"pandoc failed on {source.name}: {message}") from exc

        output = completed.stdout or ""
        if not output.strip():
            raise ConversionError(f"pandoc produced no output for {source.name}")
        return output.splitlines()


__all__ = ["PandocConverter"]
