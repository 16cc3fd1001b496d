"""
Tests for the run_simulation command line.
"""

import yaml

from run_simulation import main


def _body(output: str):
    lines = output.splitlines()
    return lines[lines.index("day\tcash\tstock") + 1:]


class TestPrint:
    def test_prints_report(self, capsys):
        assert main(["--print", "--start-date", "2024-01-01", "--days", "21"]) == 0
        body = _body(capsys.readouterr().out)
        assert len(body) == 21
        assert body[0] == "01-01-2024\t1000.00\t0"
        assert body[20] == "01-21-2024\t210.00\t34"

    def test_months_flag(self, capsys):
        assert main(["--print", "--start-date", "2024-01-01", "--months", "2"]) == 0
        assert len(_body(capsys.readouterr().out)) == 60

    def test_flags_override_config(self, capsys, config_file):
        config_file.write_text("initial_cash: 5000\nbatch_size: 50\n")
        assert main(["--print", "--start-date", "2024-01-01", "--days", "1", "--batch", "10"]) == 0
        out = capsys.readouterr().out
        assert "cash\t5000.00\tinitial investment" in out
        assert "batch\t10\tsize of each shipment" in out


class TestErrors:
    def test_invalid_parameters_exit_code(self):
        assert main(["--batch", "0", "--days", "5"]) == 1

    def test_infinite_cash_and_sales_exit_code(self):
        assert main(["--cash", "inf", "--sales", "inf", "--days", "5", "--start-date", "2024-01-01"]) == 1

    def test_missing_explicit_config_exit_code(self, tmp_path):
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 1

    def test_broken_default_config_is_not_fatal(self, config_file):
        config_file.write_text("{{{")
        assert main(["--days", "5", "--start-date", "2024-01-01"]) == 0


class TestOutputs:
    def test_plot(self, tmp_path):
        target = tmp_path / "chart.png"
        assert main(["--plot", str(target), "--days", "30", "--start-date", "2024-01-01"]) == 0
        assert target.read_bytes().startswith(b"\x89PNG")

    def test_csv_output(self, tmp_path):
        assert main(["--output-dir", str(tmp_path), "--days", "30", "--start-date", "2024-01-01"]) == 0
        assert len((tmp_path / "simulation.csv").read_text().splitlines()) == 31

    def test_output_dir_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SALESIM_OUTPUT_DIR", str(tmp_path / "env_out"))
        assert main(["--days", "10", "--start-date", "2024-01-01"]) == 0
        assert len((tmp_path / "env_out" / "simulation.csv").read_text().splitlines()) == 11

    def test_output_dir_flag_beats_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SALESIM_OUTPUT_DIR", str(tmp_path / "env_out"))
        assert main(["--output-dir", str(tmp_path / "flag_out"), "--days", "10",
                     "--start-date", "2024-01-01"]) == 0
        assert (tmp_path / "flag_out" / "simulation.csv").exists()
        assert not (tmp_path / "env_out").exists()

    def test_log_dir_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SALESIM_LOG_DIR", str(tmp_path / "logs"))
        assert main(["--days", "5", "--start-date", "2024-01-01"]) == 0
        assert len(list((tmp_path / "logs").glob("sales_simulation_*.log"))) == 1

    def test_save_config(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text("batch_size: 25\n")
        assert main(["--config", str(path), "--save-config", "--delay", "7", "--days", "10"]) == 0
        saved = yaml.safe_load(path.read_text())
        assert saved["batch_size"] == 25
        assert saved["shipment_delay"] == 7
        assert saved["duration_days"] == 10

    def test_compare_batch_sizes(self, capsys):
        assert main(["--compare-batch-sizes", "10", "20", "--days", "90",
                     "--start-date", "2024-01-01", "--log-level", "WARNING"]) == 0
        lines = capsys.readouterr().out.splitlines()
        header = lines.index("batch\tfinal_cash\tclosing_stock\torders\tstockout_days")
        assert [line.split("\t")[0] for line in lines[header + 1:header + 3]] == ["10", "20"]
