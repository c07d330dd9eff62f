"""
Full pipeline tests.

Tests the complete flow from a DIMACS file to a verified decomposition, and
the standalone hypergraph partitioning script.
"""

import sys
import tempfile
from pathlib import Path

import pytest
from omegaconf import OmegaConf

# Add project root to path
project_root = str(Path(__file__).parent.parent)
sys.path.insert(0, project_root)


def import_module_directly(module_name, file_path):
    """Import a module directly from file path."""
    import importlib.util
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


# (x1 | x2) & (x2 | x3) & (x3 | x4), 8 models
CHAIN_CNF = """c chain of four variables
p cnf 4 3
1 2 0
2 3 0
3 4 0
"""

# 10 variables, 8 clauses, variable 10 unused
LARGER_CNF = """c Larger test formula
p cnf 10 8
1 2 3 0
-1 -2 4 0
3 -4 5 0
-3 5 6 0
4 -6 7 0
-5 7 8 0
6 -8 9 0
-7 -9 1 0
"""

HMETIS_GRAPH = """4 7
1 2
1 7 5 6
5 6 4
2 3 4
"""


def make_config(input_path, output_dir, **overrides):
    cfg = OmegaConf.create({
        'input': str(input_path),
        'blocks': 2,
        'seed': 42,
        'heuristic': 'none',
        'partitioner': {'mode': 'bfs', 'imbalance': 1.0},
        'counter': {
            'name': 'enumeration',
            'd4_path': 'd4',
            'timeout': None,
            'count_original': False,
        },
        'output': {
            'dir': str(output_dir),
            'save_partition': False,
            'save_cnfs': False,
        },
    })
    return OmegaConf.merge(cfg, OmegaConf.create(overrides))


class TestDecomposePipeline:
    """Tests for run_decomposition."""

    def test_chain(self):
        """Test decomposing the chain formula along its bfs partition."""
        from decompose import run_decomposition

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "chain.cnf"
            path.write_text(CHAIN_CNF)

            cfg = make_config(path, Path(tmpdir) / "out", counter={'count_original': True})
            run = run_decomposition(cfg)

        assert run.instance == 'chain'
        assert run.partitioner == 'bfs'
        assert run.cut == [3]
        assert run.count_original == 8
        assert len(run.part_counts) == 2
        assert run.count == run.count_conditioned

    @pytest.mark.parametrize('mode', ['bfs', 'dfs', 'random'])
    @pytest.mark.parametrize('heuristic', ['none', 'maxo', 'moms', 'mams'])
    def test_modes_and_heuristics(self, mode, heuristic):
        """Test that every strategy yields a verified decomposition."""
        from decompose import run_decomposition

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "larger.cnf"
            path.write_text(LARGER_CNF)

            cfg = make_config(
                path,
                Path(tmpdir) / "out",
                blocks=3,
                heuristic=heuristic,
                partitioner={'mode': mode},
            )
            run = run_decomposition(cfg)

        assert run.heuristic == heuristic
        assert run.blocks == 3
        assert run.count_conditioned is not None
        assert run.count == run.count_conditioned

    def test_saves_outputs(self):
        """Test writing the partition and the fragments."""
        from decompose import run_decomposition
        from cnfpart.hypergraph import Partition
        from cnfpart.preprocessing import parse_dimacs

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "chain.cnf"
            path.write_text(CHAIN_CNF)
            out = Path(tmpdir) / "out"

            cfg = make_config(path, out, output={'save_partition': True, 'save_cnfs': True})
            run_decomposition(cfg)

            assert Partition.from_file(out / "chain.bfs.part2") == [0, 0, 1]
            assert parse_dimacs(out / "chain.bfs.0.cnf").clauses == [[1, 2], [2, 3]]
            assert parse_dimacs(out / "chain.bfs.1.cnf").clauses == [[3, 4]]

    def test_d4_timeout(self):
        """Test that a timed out count leaves the run unchecked."""
        from unittest import mock
        import subprocess
        from decompose import run_decomposition

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "chain.cnf"
            path.write_text(CHAIN_CNF)

            cfg = make_config(path, Path(tmpdir) / "out", counter={'name': 'd4', 'timeout': 1})
            with mock.patch('subprocess.run', side_effect=subprocess.TimeoutExpired('d4', 1)):
                run = run_decomposition(cfg)

        assert run.count_conditioned is None
        assert run.part_counts == []

    def test_d4_preprocess(self):
        """Test that the formula simplified by d4 is the one decomposed."""
        from unittest import mock
        import subprocess
        from decompose import run_decomposition

        def fake_d4(cmd, **kwargs):
            dump = Path(cmd[cmd.index('--dump-preproc') + 1])
            dump.write_text("p cnf 4 2\n1 2 0\n2 3 0\n")
            return subprocess.CompletedProcess(args=cmd, returncode=0, stdout='', stderr='')

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "chain.cnf"
            path.write_text(CHAIN_CNF)
            out = Path(tmpdir) / "out"

            cfg = make_config(path, out, counter={'preprocess': True})
            with mock.patch('subprocess.run', side_effect=fake_d4) as run_d4:
                run = run_decomposition(cfg)

            assert (out / "chain.preprocessed.cnf").exists()

        cmd = run_d4.call_args[0][0]
        assert cmd[0] == 'd4'
        assert cmd[cmd.index('--input') + 1] == str(path)
        assert run_d4.call_count == 1
        assert run.instance == 'chain'
        assert run.cut == [2]
        assert len(run.part_counts) == 2
        assert run.count == run.count_conditioned

    def test_unsatisfiable(self):
        """Test that unsatisfiable formulas cannot be decomposed."""
        from decompose import run_decomposition
        from cnfpart.errors import UnsatisfiableError

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "unsat.cnf"
            path.write_text("p cnf 2 3\n1 0\n-1 2 0\n-2 0\n")

            with pytest.raises(UnsatisfiableError):
                run_decomposition(make_config(path, Path(tmpdir) / "out"))


class TestPartitionScript:
    """Tests for scripts/partition_hypergraph.py."""

    def test_partition_file(self):
        """Test partitioning an hMETIS file into a partition file."""
        from cnfpart.hypergraph import Partition

        script = import_module_directly(
            "partition_hypergraph",
            str(Path(project_root) / "scripts" / "partition_hypergraph.py")
        )

        with tempfile.TemporaryDirectory() as tmpdir:
            graph_file = Path(tmpdir) / "graph.hgr"
            graph_file.write_text(HMETIS_GRAPH)
            output = Path(tmpdir) / "graph.part2"

            script.partition_file(graph_file, output, 'bfs', 2)
            partition = Partition.from_file(output)

            assert len(partition) == 7
            assert partition.block_sizes(2) == [4, 3]

            script.partition_file(graph_file, output, 'random', 3, epsilon=1.0, seed=0)
            assert len(Partition.from_file(output)) == 7


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
