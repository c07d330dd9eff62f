"""
d4 Interface for #SAT (Model Counting).

This module wraps the d4 knowledge compiler, used both to preprocess CNF
formulas and to count their models exactly by compiling them into d-DNNF.
It also provides :func:`compute_model_count`, which counts an in-memory
formula with either d4 or model enumeration.
"""

import subprocess
import tempfile
import os
import time
from pathlib import Path
from typing import Optional, Tuple
import logging

from ..preprocessing.cnf_parser import CNF, serialize_dimacs
from .sat_solver import count_models_pycosat

logger = logging.getLogger(__name__)

DEFAULT_D4_PATH = 'd4'
COUNTERS = ('d4', 'enumeration')


class D4Solver:
    """
    Wrapper around a d4 executable.

    Args:
        path: Path to the d4 executable (default: 'd4' from PATH)
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or DEFAULT_D4_PATH

    def __repr__(self) -> str:
        return f"D4Solver(path={self.path!r})"

    def _run(self, args: list, timeout: Optional[float] = None) -> subprocess.CompletedProcess:
        cmd = [self.path] + args
        logger.debug(f"Running d4: {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout
            )
        except FileNotFoundError:
            logger.error(f"d4 not found at '{self.path}'")
            raise RuntimeError(
                f"d4 not found. Please install d4 and ensure "
                f"'{self.path}' is in your PATH."
            ) from None

    def compile(
        self,
        cnf_file: str | Path,
        timeout: Optional[float] = None
    ) -> Optional[Tuple[int, int]]:
        """
        Compute the exact model count of a CNF file.

        Args:
            cnf_file: Path to CNF file in DIMACS format
            timeout: Timeout in seconds (default: none)

        Returns:
            (milliseconds taken, model count), or None if d4 timed out

        Raises:
            FileNotFoundError: If the CNF file does not exist
            RuntimeError: If d4 is not installed, fails, or prints no count
        """
        cnf_file = Path(cnf_file)
        if not cnf_file.exists():
            raise FileNotFoundError(f"CNF file not found: {cnf_file}")

        if timeout is not None:
            logger.debug(f"Timeout at: {timeout} s")

        start = time.monotonic()
        try:
            result = self._run(
                [
                    '--input', str(cnf_file),
                    '--method', 'ddnnf-compiler',
                    '--partitioning-heuristic', 'none',
                ],
                timeout=timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"d4 timed out after {timeout}s for {cnf_file}")
            return None
        duration = int((time.monotonic() - start) * 1000)

        if result.returncode != 0:
            logger.debug(f"stderr: {result.stderr}")
            raise RuntimeError(f"d4 failed with return code {result.returncode} on {cnf_file}")

        count = parse_d4_output(result.stdout)
        logger.debug(f"d4 took {duration} ms, model count: {count}")
        return duration, count

    def preprocess(self, cnf_file: str | Path, out_file: str | Path) -> int:
        """
        Preprocess a CNF file, dumping the simplified formula.

        Args:
            cnf_file: Path to input CNF file
            out_file: Where d4 writes the preprocessed formula

        Returns:
            Milliseconds taken
        """
        cnf_file = Path(cnf_file)
        if not cnf_file.exists():
            raise FileNotFoundError(f"CNF file not found: {cnf_file}")

        start = time.monotonic()
        result = self._run([
            '--input', str(cnf_file),
            '--method', 'ddnnf-compiler',
            '--only-preproc', '1',
            '--dump-preproc', str(out_file),
        ])

        if result.returncode != 0:
            logger.debug(f"stderr: {result.stderr}")
            raise RuntimeError(f"d4 preprocessing failed with return code {result.returncode}")

        return int((time.monotonic() - start) * 1000)

    def is_available(self) -> bool:
        """Check whether the d4 executable can be started."""
        try:
            subprocess.run(
                [self.path, '--help'],
                capture_output=True,
                timeout=10
            )
            return True
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return False


def parse_d4_output(output: str) -> int:
    """
    Extract the model count from d4 output.

    d4 ends its output with a solution line ``s <count>``.

    Raises:
        RuntimeError: If the last line is not a solution line
    """
    lines = output.strip().splitlines()
    if not lines:
        raise RuntimeError("No output from d4")

    parts = lines[-1].split()
    if len(parts) != 2 or parts[0] != 's' or not parts[1].isdigit():
        logger.debug(f"d4 output: {output[-500:]}")
        raise RuntimeError(f"Last line of d4 output is not a solution line: {lines[-1]!r}")

    return int(parts[1])


def compute_model_count(
    cnf: CNF,
    counter: str = 'd4',
    d4_path: Optional[str] = None,
    timeout: Optional[float] = None
) -> Optional[Tuple[int, int]]:
    """
    Count the models of an in-memory formula.

    With ``'d4'`` the formula is written to a temporary DIMACS file and
    compiled; with ``'enumeration'`` its models are enumerated by the SAT
    solver, which is only feasible for small formulas.

    Args:
        cnf: Formula to count
        counter: ``'d4'`` or ``'enumeration'``
        d4_path: Path to d4 executable
        timeout: Timeout in seconds for d4

    Returns:
        (milliseconds taken, model count), or None if d4 timed out

    Raises:
        ValueError: If ``counter`` is unknown
    """
    if counter == 'enumeration':
        start = time.monotonic()
        count = count_models_pycosat(cnf)
        return int((time.monotonic() - start) * 1000), count

    if counter != 'd4':
        raise ValueError(f"Unknown model counter: {counter} (expected one of {COUNTERS})")

    with tempfile.NamedTemporaryFile(
        mode='w', suffix='.cnf', delete=False
    ) as f:
        f.write(serialize_dimacs(cnf))
        temp_path = f.name

    try:
        return D4Solver(d4_path).compile(temp_path, timeout)
    finally:
        os.unlink(temp_path)
