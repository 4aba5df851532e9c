from unittest.mock import patch

from employee_tracker.core.exceptions import StartupError
from employee_tracker.main import main
from employee_tracker.services.store import FallbackEntityStore


class TestMain:

    def test_in_memory_session(self, capsys):
        with patch("builtins.input", side_effect=["1", "15"]):
            assert main(["--in-memory"]) == 0

        out = capsys.readouterr().out
        assert "EMPLOYEE MANAGEMENT SYSTEM" in out
        assert "in memory" in out
        assert "Engineering" in out
        assert "Goodbye!" in out

    def test_ctrl_d_exits_cleanly(self, capsys):
        with patch("builtins.input", side_effect=EOFError):
            assert main(["--in-memory"]) == 0
        assert "Goodbye!" in capsys.readouterr().out

    def test_ctrl_c_exits_cleanly(self, capsys):
        with patch("builtins.input", side_effect=KeyboardInterrupt):
            assert main(["--in-memory"]) == 0
        assert "Goodbye!" in capsys.readouterr().out

    def test_startup_failure_exits_non_zero(self, capsys):
        with patch.object(FallbackEntityStore, "start", side_effect=StartupError("no storage")):
            assert main(["--in-memory"]) == 1
        assert "no storage" in capsys.readouterr().err
