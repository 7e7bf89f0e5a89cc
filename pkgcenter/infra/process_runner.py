import subprocess
from typing import Callable, Final, Iterator, Sequence

from logly import logger

from pkgcenter.core.errors import SpawnFailedError

DEFAULT_CHUNK_SIZE: Final[int] = 4096


def decode_output(data: bytes) -> str:
    """Decodes process output bytes, replacing anything that is not valid UTF-8."""
    return data.decode("utf-8", errors="replace")


class ProcessRunner:
    """Runs external commands without a shell, one at a time.

    Output is read incrementally. After every chunk the optional `yield_fn` is called
    so a hosting event loop can process pending events while a long command runs.

    Args:
        yield_fn: Called once per chunk read (e.g. `QCoreApplication.processEvents`).
        popen: Process factory with the `subprocess.Popen` signature.
        chunk_size: Maximum number of bytes returned by a single read.
    """

    def __init__(
        self,
        yield_fn: Callable[[], None] | None = None,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._yield_fn = yield_fn
        self._popen = popen
        self._chunk_size = chunk_size

    def _spawn(self, argv: Sequence[str], with_stdin: bool = False) -> subprocess.Popen:
        logger.info(f"Starting subprocess argv={' '.join(argv)}")
        kwargs: dict = {
            "stdout": subprocess.DEVNULL if with_stdin else subprocess.PIPE,
            "stderr": subprocess.DEVNULL,
        }
        if with_stdin:
            kwargs["stdin"] = subprocess.PIPE

        try:
            return self._popen(list(argv), **kwargs)
        except (OSError, ValueError) as e:
            # ValueError: an argument Popen cannot pass to exec, e.g. one with a NUL.
            logger.exception("Subprocess could not be started")
            raise SpawnFailedError(argv, str(e)) from e

    def _read_chunks(self, proc: subprocess.Popen) -> Iterator[bytes]:
        while True:
            chunk = proc.stdout.readline(self._chunk_size)
            if not chunk:
                return
            yield chunk

    @staticmethod
    def _reap(proc: subprocess.Popen) -> int:
        proc.stdout.close()
        returncode = proc.wait()
        logger.info(f"Subprocess finished returncode={returncode}")
        return returncode

    def stream(self, argv: Sequence[str]) -> Iterator[bytes]:
        """Yields raw output chunks of `argv` as they arrive.

        The process is spawned on the first `next()` and reaped once the stream is
        exhausted or closed. The iterator is finite and cannot be restarted.

        Raises:
            SpawnFailedError: If the process could not be started.
        """
        proc = self._spawn(argv)
        try:
            yield from self._read_chunks(proc)
        finally:
            self._reap(proc)

    def _drain(self, argv: Sequence[str], keep: bool) -> tuple[bytes, int]:
        parts: list[bytes] = []
        proc = self._spawn(argv)
        try:
            for chunk in self._read_chunks(proc):
                if keep:
                    parts.append(chunk)
                self._yield()
        finally:
            returncode = self._reap(proc)
        return b"".join(parts), returncode

    def _yield(self) -> None:
        if self._yield_fn is not None:
            self._yield_fn()

    def run_capture(self, argv: Sequence[str]) -> str:
        """Runs `argv` and returns its standard output as text.

        Raises:
            SpawnFailedError: If the process could not be started.
        """
        data, _ = self._drain(argv, keep=True)
        return decode_output(data)

    def run_status(self, argv: Sequence[str]) -> bool:
        """Runs `argv`, discards its output, and reports whether it exited with 0.

        Raises:
            SpawnFailedError: If the process could not be started.
        """
        _, returncode = self._drain(argv, keep=False)
        return returncode == 0

    def run_with_stdin(self, text: str, argv: Sequence[str]) -> bool:
        """Runs `argv` with `text` plus a newline written to its standard input.

        Intended for quick commands such as `sudo -S -v`; the event loop is not
        serviced while waiting.

        Raises:
            SpawnFailedError: If the process could not be started.
        """
        proc = self._spawn(argv, with_stdin=True)
        stdin = proc.stdin
        try:
            stdin.write((text + "\n").encode("utf-8"))
            stdin.flush()
        except BrokenPipeError:
            # The process exited before reading; its exit status decides.
            pass
        finally:
            try:
                stdin.close()
            except BrokenPipeError:
                pass
        returncode = proc.wait()
        logger.info(f"Subprocess finished returncode={returncode}")
        return returncode == 0
