"""pdflatex integration.

Runs the LaTeX compiler on a complete document in a throwaway
directory. The compiler runs twice so references resolve.

A document that does not compile is a normal outcome and comes back as
a failed CompileResult with the compiler log. Only a compiler that
cannot be started raises CompilerError.

Usage:
    from sheetwright.integrations.latex import LatexCompiler

    compiler = LatexCompiler()
    result = compiler.compile(full_document)
    if result.success:
        Path("sheet.pdf").write_bytes(result.pdf)
    else:
        print(result.message)
"""

import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sheetwright.core.exceptions import CompilerError
from sheetwright.core.logging import get_logger
from sheetwright.integrations.base import IntegrationBase

logger = get_logger(__name__)

JOB_NAME = "document"
DEFAULT_PASSES = 2


@dataclass
class CompileResult:
    """Result of one compile.

    Attributes:
        success: Whether a PDF was produced
        pdf: PDF bytes when successful
        message: Short diagnostic when not
        log: Full compiler log (may be empty)
    """

    success: bool
    pdf: Optional[bytes] = None
    message: str = ""
    log: str = ""


def first_error(log: str) -> Optional[str]:
    """First ``! ...`` error line of a TeX log, with its ``l.<n>`` line if present."""
    lines = log.splitlines()
    for i, line in enumerate(lines):
        if line.startswith("!"):
            error = line[1:].strip()
            for follow in lines[i + 1 : i + 8]:
                if follow.startswith("l."):
                    return f"{error} ({follow.split(' ', 1)[0]})"
            return error
    return None


class LatexCompiler(IntegrationBase):
    """pdflatex wrapper implementing ``compile(text) -> CompileResult``."""

    error_class = CompilerError

    def __init__(
        self,
        executable: str = "pdflatex",
        timeout: float = 30.0,
        passes: int = DEFAULT_PASSES,
    ) -> None:
        self.executable = executable
        self.timeout = timeout
        self.passes = passes

    def is_configured(self) -> bool:
        return shutil.which(self.executable) is not None

    def health_check(self) -> bool:
        if not self.is_configured():
            return False
        try:
            subprocess.run(
                [self.executable, "--version"],
                capture_output=True,
                timeout=10,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"pdflatex health check failed: {e}")
            return False
        return True

    def compile(self, document: str) -> CompileResult:
        """Compile a complete LaTeX document to PDF.

        Args:
            document: Full document text, preamble included

        Returns:
            CompileResult

        Raises:
            CompilerError: If pdflatex is missing or cannot be started
        """
        self.ensure_configured()

        with tempfile.TemporaryDirectory(prefix="sheetwright-") as work:
            workdir = Path(work)
            (workdir / f"{JOB_NAME}.tex").write_text(document, encoding="utf-8")
            pdf_path = workdir / f"{JOB_NAME}.pdf"
            log_path = workdir / f"{JOB_NAME}.log"

            failure: Optional[str] = None
            for attempt in range(1, self.passes + 1):
                try:
                    proc = subprocess.run(
                        [self.executable, "-interaction=nonstopmode", f"{JOB_NAME}.tex"],
                        cwd=workdir,
                        capture_output=True,
                        timeout=self.timeout,
                    )
                except subprocess.TimeoutExpired:
                    failure = f"Compilation timed out after {self.timeout:g}s"
                    break
                except OSError as e:
                    raise CompilerError(f"Cannot run {self.executable}: {e}") from e
                if proc.returncode != 0:
                    failure = f"{self.executable} exited with status {proc.returncode}"
                    break
                logger.debug(
                    "pdflatex pass finished",
                    extra={"context": {"pass": attempt, "returncode": proc.returncode}},
                )

            log = _read_text(log_path)
            if failure is None and pdf_path.exists():
                logger.info(
                    "Compiled document",
                    extra={"context": {"bytes": pdf_path.stat().st_size}},
                )
                return CompileResult(success=True, pdf=pdf_path.read_bytes(), log=log)

        message = first_error(log) or failure or "Compilation failed"
        logger.warning("Compilation failed", extra={"context": {"error": message}})
        return CompileResult(success=False, message=message, log=log)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""
