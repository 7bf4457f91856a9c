"""JqEvaluator: delegates filter expressions to an external ``jq`` process.

The document is piped to the process on stdin and the expression passed
unmodified as the last argument.  The call is synchronous and may be slow;
an optional timeout turns a hung process into ``EvaluationError("timeout")``.

A non-zero exit status, or any output line carrying jq's own
``jq: error`` marker, is reported as ``EvaluationError`` with the raw
diagnostic text.

Example::

    from json_tree_nav.evaluators import JqEvaluator

    jq = JqEvaluator(timeout=5.0)
    jq.evaluate(".abi[0].name", '{"abi": [{"name": "f"}]}')   # '"f"'
"""

from __future__ import annotations

import shutil
import subprocess

import structlog

from json_tree_nav.exceptions import EvaluationError

logger = structlog.get_logger(__name__)

ERROR_MARKER = "jq: error"


class JqEvaluator:
    """Runs ``jq`` (or a compatible executable) as a subprocess.

    Satisfies the ``Evaluator`` Protocol structurally; no inheritance needed.

    Args:
        executable: Program name or path.  Defaults to ``"jq"``.
        args: Extra arguments placed before the expression, e.g. ``("-c",)``.
        timeout: Seconds to wait before giving up; None waits forever.
    """

    def __init__(
        self,
        executable: str = "jq",
        args: tuple[str, ...] = (),
        timeout: float | None = 10.0,
    ) -> None:
        self._executable = executable
        self._args = tuple(args)
        self._timeout = timeout

    def __repr__(self) -> str:
        return f"JqEvaluator(executable={self._executable!r}, timeout={self._timeout!r})"

    @property
    def executable(self) -> str:
        return self._executable

    def is_available(self) -> bool:
        """True when the executable can be found on ``PATH``."""
        return shutil.which(self._executable) is not None

    def evaluate(self, expression: str, document: str) -> str:
        """Run the evaluator and return its stdout without trailing newlines.

        Raises:
            EvaluationError: On timeout, a missing executable, a non-zero exit
                status, or output carrying the error marker.
        """
        command = [self._executable, *self._args, expression]
        logger.debug("evaluator_invoked", executable=self._executable, expression=expression)
        try:
            completed = subprocess.run(
                command,
                input=document,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning("evaluator_timeout", expression=expression, timeout=self._timeout)
            raise EvaluationError("timeout") from None
        except FileNotFoundError:
            raise EvaluationError(
                f"{self._executable!r} not found; install it or set NavigatorConfig.evaluator"
            ) from None

        output = completed.stdout
        marked = any(
            line.startswith(ERROR_MARKER)
            for line in (*completed.stderr.splitlines(), *output.splitlines())
        )
        if completed.returncode != 0 or marked:
            diagnostic = completed.stderr.strip() or output.strip()
            logger.warning(
                "evaluator_failed",
                expression=expression,
                returncode=completed.returncode,
                diagnostic=diagnostic,
            )
            raise EvaluationError(diagnostic or f"exit status {completed.returncode}")

        return output.rstrip("\n")
