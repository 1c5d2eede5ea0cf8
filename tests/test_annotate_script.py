import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def test_annotate_script_fails_strict_check_before_contacting_service(tmp_path: Path) -> None:
    input_path = tmp_path / "in.maf"
    input_path.write_text("Hugo_Symbol\tChromosome\nBRAF\t7\n")
    output_path = tmp_path / "out.maf"

    result = subprocess.run(
        [
            sys.executable,
            "scripts/annotate_maf.py",
            "--filename",
            str(input_path),
            "--output-filename",
            str(output_path),
            "--strict-maf-checks",
        ],
        cwd=ROOT,
        text=True,
        capture_output=True,
        check=False,
    )

    assert result.returncode == 1
    assert "missing required columns" in result.stderr
    assert not output_path.exists()


def test_annotate_script_rejects_bad_output_format(tmp_path: Path) -> None:
    input_path = tmp_path / "in.maf"
    input_path.write_text("Hugo_Symbol\nBRAF\n")

    result = subprocess.run(
        [
            sys.executable,
            "scripts/annotate_maf.py",
            "--filename",
            str(input_path),
            "--output-filename",
            str(tmp_path / "out.maf"),
            "--output-format",
            "fancy",
        ],
        cwd=ROOT,
        text=True,
        capture_output=True,
        check=False,
    )

    assert result.returncode == 1
    assert "Supplied output format value: fancy" in result.stderr
