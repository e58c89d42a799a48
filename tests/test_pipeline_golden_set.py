"""
Golden Set Tests: Runtime truth for pipeline behavior.

Runs every stage script end-to-end on small synthetic exports written to a
temporary directory, and optionally against a curated golden set.

Usage:
    pytest tests/test_pipeline_golden_set.py -v

Golden set setup (optional):
    1. Put the four raw exports in golden_set/input/
    2. Run the pipeline on them and copy data/ to golden_set/expected_output/
    3. These tests verify the pipeline still produces the same output
"""

import json
from pathlib import Path

import pandas as pd
import pytest

from config.layouts import BUDGET_HEADER, DETAIL_HEADER
from contracts import BudgetRecordsSchema, DetailRecordsSchema, EquipmentCatalogSchema
from orcamento.writers import read_budget_csv

PROJECT_ROOT = Path(__file__).parent.parent
GOLDEN_INPUT = PROJECT_ROOT / "golden_set" / "input"
GOLDEN_EXPECTED = PROJECT_ROOT / "golden_set" / "expected_output"

RAW_NAMES = {
    "equipamentos": "Orçamento 2026 -Dashboard - csv.csv",
    "detalhado": "orçamento detalhado 2026 - Dashboard - csv.csv",
    "razao": "razao contabil.csv",
    "itens": "razao por item.csv",
}


def months(values: dict) -> list:
    return [values.get(i, "") for i in range(12)]


def write_raw_exports(raw_dir: Path, with_ledgers: bool = True) -> None:
    """Small but representative versions of the four accounting exports."""
    raw_dir.mkdir(parents=True, exist_ok=True)

    equipment_rows = [
        ["CLASSE", "DESCRICAO", "GRUPO"] + [f"M{i}" for i in range(12)] + ["TOTAL", "EQUIPAMENTO"],
        ["421101", "SALARIOS", "PESSOAL"] + months({0: "100,00", 1: "100,00"}) + ["", ""],
        ["422103", "COMBUSTIVEIS", "OPERACIONAL"] + months({0: "R$ 1.500,00", 6: "R$ -"}) + ["", "EH-01"],
        ["422109", "PNEUS", "OPERACIONAL"] + months({3: "2.400,00"}) + ["", "CB-02"],
        ["422105", "MANUTENCAO", "OPERACIONAL"] + months({}) + ["", "CB-01"],
    ]
    (raw_dir / RAW_NAMES["equipamentos"]).write_text(
        "\n".join(";".join(row) for row in equipment_rows) + "\n", encoding="utf-8"
    )

    detailed_rows = [
        ["CLASSE", "DESCRICAO"] + [f"A{i}" for i in range(12)] + ["TOTAL", ""] + [f"B{i}" for i in range(12)]
        + ["TOTAL", ""],
        ["\ufeff421101", "SALARIOS"] + months({0: "90,00"}) + ["90,00", ""] + months({0: "110,00"}) + ["", ""],
        ["4", "MARGEM DE CONTRIBUIÇÃO"] + months({0: "1,00"}) + ["", ""] + months({0: "1,00"}) + ["", ""],
        ["422119", "SOFTWARE"] + months({}) + ["", ""] + months({11: "300,00"}) + ["", ""],
    ]
    (raw_dir / RAW_NAMES["detalhado"]).write_text(
        "\n".join(";".join(row) for row in detailed_rows) + "\n", encoding="utf-8"
    )

    if not with_ledgers:
        return

    (raw_dir / RAW_NAMES["razao"]).write_text(
        "\n".join([
            '"EXERCICIO","MES","CONTA","DESCRICAO","CENTRO","HISTORICO","VALOR"',
            '2026,"Janeiro",422103,"COMBUSTIVEIS","","EH-01 diesel, posto central","1.200,00"',
            '2026,"Março",421101,"SALARIOS","CC-ADM","Folha","95,00"',
            '2025,"Dezembro",421101,"SALARIOS","","Folha","80,00"',
        ]) + "\n",
        encoding="utf-8",
    )
    (raw_dir / RAW_NAMES["itens"]).write_text(
        "\n".join([
            '"DATA","CONTA","DESCRICAO","APLICACAO","PRODUTO","QTD","UNITARIO","TOTAL","FORNECEDOR"',
            '"10/04/2026",422109,"PNEUS","CB-02 troca","Pneu 295/80, radial",4,"600,00","2.400,00","Borracharia"',
            '"11/04/2026",422105,"MANUTENCAO","Oficina","Graxa",1,"50,00","50,00","Loja"',
        ]) + "\n",
        encoding="utf-8",
    )


def run_pipeline_on(script_loader, raw_dir: Path, work_dir: Path) -> dict:
    """Run every stage in order against tmp paths. Returns script -> success."""
    intermediate = work_dir / "intermediate"
    data_dir = work_dir / "data"
    public_dir = work_dir / "public" / "data"

    steps = [
        ("stage1_convert/01_orcamento_equipamentos.py", [
            "--input", str(raw_dir / RAW_NAMES["equipamentos"]),
            "--output", str(intermediate / "orcado_2026_equipamentos.csv"),
        ]),
        ("stage1_convert/02_orcamento_detalhado.py", [
            "--input", str(raw_dir / RAW_NAMES["detalhado"]),
            "--output-previous", str(intermediate / "orcado_2025_detalhado.csv"),
            "--output-current", str(intermediate / "orcado_2026_detalhado.csv"),
        ]),
        ("stage1_convert/03_razao_contabil.py", [
            "--input", str(raw_dir / RAW_NAMES["razao"]),
            "--output", str(intermediate / "realizado_2026_razao.csv"),
            "--year", "2026", "--allow-missing",
        ]),
        ("stage1_convert/04_razao_itens.py", [
            "--input", str(raw_dir / RAW_NAMES["itens"]),
            "--output", str(intermediate / "realizado_2026_itens.csv"),
            "--details", str(intermediate / "detalhes_2026.csv"),
            "--year", "2026", "--allow-missing",
        ]),
        ("stage2_prepare/05_combine_budgets.py", [
            "--intermediate-dir", str(intermediate),
            "--data-dir", str(data_dir),
            "--public-dir", str(public_dir),
            "--year", "2026",
        ]),
        ("stage2_prepare/06_generate_metadata.py", [
            "--data-dir", str(data_dir),
            "--public-dir", str(public_dir),
        ]),
    ]

    results = {}
    for rel_path, argv in steps:
        results[rel_path] = script_loader(rel_path).main(argv)
        if not results[rel_path]:
            break
    return results


def snapshot(directory: Path) -> dict:
    return {
        str(path.relative_to(directory)): path.read_bytes()
        for path in sorted(directory.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def pipeline_run(tmp_path, script_loader):
    raw_dir = tmp_path / "raw"
    write_raw_exports(raw_dir)
    results = run_pipeline_on(script_loader, raw_dir, tmp_path)
    return tmp_path, results


class TestEndToEnd:
    """Raw exports -> dashboard files, through every stage script."""

    def test_every_stage_succeeds(self, pipeline_run):
        _, results = pipeline_run
        assert len(results) == 6
        assert all(results.values()), results

    def test_current_budget(self, pipeline_run):
        """Detailed lines first, then per-equipment lines; zero months dropped."""
        work_dir, _ = pipeline_run
        df = pd.read_csv(work_dir / "data" / "2026" / "orcado.csv", dtype={"classe_codigo": str})

        assert list(df.columns) == BUDGET_HEADER
        BudgetRecordsSchema.validate(df)
        assert df["valor"].sum() == pytest.approx(110 + 300 + 100 + 100 + 1500 + 2400)
        assert df["equipamento"].tolist()[:2] == ["GERAL", "GERAL"]
        assert "MARGEM DE CONTRIBUIÇÃO" not in df["subclasse"].tolist()
        assert "CB-01" not in df["equipamento"].tolist()

    def test_previous_budget(self, pipeline_run):
        work_dir, _ = pipeline_run
        df = pd.read_csv(work_dir / "data" / "2025" / "orcado.csv", dtype={"classe_codigo": str})

        assert df.to_dict("records") == [{
            "ano": 2025, "mes": "Jan", "classe_codigo": "421101", "classe_orcamentaria": "Pessoal",
            "subclasse": "Salários", "equipamento": "GERAL", "centro_custo": "CC-421", "valor": 90.0,
        }]

    def test_actuals_from_both_ledgers(self, pipeline_run):
        work_dir, _ = pipeline_run
        df = pd.read_csv(work_dir / "data" / "2026" / "realizado.csv", dtype={"classe_codigo": str})

        assert sorted(df["valor"].tolist()) == [50.0, 95.0, 1200.0, 2400.0]
        assert set(df["ano"]) == {2026}
        assert df.loc[df["valor"] == 95.0, "centro_custo"].item() == "CC-ADM"

    def test_details_only_for_known_equipment(self, pipeline_run):
        work_dir, _ = pipeline_run
        df = pd.read_csv(work_dir / "data" / "2026" / "detalhes.csv", keep_default_na=False)

        assert list(df.columns) == DETAIL_HEADER
        DetailRecordsSchema.validate(df)
        assert df["equipamento"].tolist() == ["CB-02"]
        assert df["produto"].tolist() == ["Pneu 295/80, radial"]

    def test_metadata(self, pipeline_run):
        work_dir, _ = pipeline_run
        metadata = work_dir / "data" / "metadata"

        equipment = json.loads((metadata / "equipamentos.json").read_text(encoding="utf-8"))["equipamentos"]
        assert [e["codigo"] for e in equipment] == ["CB-02", "EH-01", "GERAL"]
        assert [e["centro_custo"] for e in equipment] == ["CC-001", "CC-002", "CC-003"]
        EquipmentCatalogSchema.validate(pd.DataFrame(equipment))

        classes = json.loads((metadata / "classes.json").read_text(encoding="utf-8"))
        assert "classes_orcamentarias" in classes

        config = json.loads((metadata / "config.json").read_text(encoding="utf-8"))
        assert config["aplicacao"]["moeda"] == "BRL"

    def test_public_mirror_matches(self, pipeline_run):
        work_dir, _ = pipeline_run
        assert snapshot(work_dir / "public" / "data") == snapshot(work_dir / "data")


class TestFailureModes:
    """Missing inputs: fatal for budget sheets, tolerated for ledgers."""

    def test_missing_budget_sheet_fails(self, tmp_path, script_loader):
        module = script_loader("stage1_convert/01_orcamento_equipamentos.py")
        output = tmp_path / "out.csv"

        assert module.main(["--input", str(tmp_path / "nao_existe.csv"), "--output", str(output)]) is False
        assert not output.exists()

    def test_missing_ledger_without_flag_fails(self, tmp_path, script_loader):
        module = script_loader("stage1_convert/03_razao_contabil.py")
        argv = ["--input", str(tmp_path / "nao_existe.csv"), "--output", str(tmp_path / "out.csv")]
        assert module.main(argv) is False

    def test_missing_ledgers_are_tolerated(self, tmp_path, script_loader):
        raw_dir = tmp_path / "raw"
        write_raw_exports(raw_dir, with_ledgers=False)

        results = run_pipeline_on(script_loader, raw_dir, tmp_path)

        assert all(results.values())
        actuals = pd.read_csv(tmp_path / "data" / "2026" / "realizado.csv")
        assert list(actuals.columns) == BUDGET_HEADER
        assert actuals.empty

    def test_combine_without_stage1_fails(self, tmp_path, script_loader):
        module = script_loader("stage2_prepare/05_combine_budgets.py")
        argv = [
            "--intermediate-dir", str(tmp_path / "intermediate"),
            "--data-dir", str(tmp_path / "data"),
            "--public-dir", str(tmp_path / "public"),
        ]
        assert module.main(argv) is False


class TestSpreadsheetPlaceholders:
    """Spreadsheet error text in a sheet is carried as a label, never read as a missing value."""

    def test_na_equipment_passes_stage2(self, tmp_path, script_loader):
        raw_dir = tmp_path / "raw"
        write_raw_exports(raw_dir)
        row = ["422107", "LUBRIFICANTES", "OPERACIONAL"] + months({2: "75,00"}) + ["", "#N/A"]
        with open(raw_dir / RAW_NAMES["equipamentos"], "a", encoding="utf-8") as handle:
            handle.write(";".join(row) + "\n")

        results = run_pipeline_on(script_loader, raw_dir, tmp_path)

        assert all(results.values())
        assert len(results) == 6
        budget = read_budget_csv(tmp_path / "data" / "2026" / "orcado.csv")
        placeholder = budget[budget["equipamento"] == "#N/A"]
        assert placeholder["valor"].tolist() == [75.0]

        catalog = json.loads((tmp_path / "data" / "metadata" / "equipamentos.json").read_text(encoding="utf-8"))
        assert "#N/A" not in [entry["codigo"] for entry in catalog["equipamentos"]]


class TestIdempotency:
    """Verify pipeline produces identical output when run multiple times."""

    def test_pipeline_is_idempotent(self, tmp_path, script_loader):
        """
        Running the pipeline twice yields byte-identical files.

        Destination files are overwritten, never appended to, and the
        existing config.json is kept as-is.
        """
        raw_dir = tmp_path / "raw"
        write_raw_exports(raw_dir)

        run_pipeline_on(script_loader, raw_dir, tmp_path)
        first = snapshot(tmp_path / "data")
        run_pipeline_on(script_loader, raw_dir, tmp_path)

        assert snapshot(tmp_path / "data") == first

    def test_custom_config_is_preserved(self, tmp_path, script_loader):
        raw_dir = tmp_path / "raw"
        write_raw_exports(raw_dir)
        config_file = tmp_path / "data" / "metadata" / "config.json"
        config_file.parent.mkdir(parents=True)
        config_file.write_text('{"aplicacao": {"moeda": "USD"}}', encoding="utf-8")

        run_pipeline_on(script_loader, raw_dir, tmp_path)

        assert json.loads(config_file.read_text(encoding="utf-8"))["aplicacao"]["moeda"] == "USD"


@pytest.mark.skipif(
    not GOLDEN_INPUT.exists() or not GOLDEN_EXPECTED.exists(),
    reason="Golden set not configured"
)
class TestPipelineGoldenSet:
    """Verify pipeline produces expected outputs from golden inputs."""

    @pytest.mark.parametrize("relative", ["2025/orcado.csv", "2026/orcado.csv", "2026/realizado.csv"])
    def test_budget_output_matches(self, tmp_path, script_loader, relative):
        expected_path = GOLDEN_EXPECTED / relative
        if not expected_path.exists():
            pytest.skip(f"{relative} not in golden set")

        run_pipeline_on(script_loader, GOLDEN_INPUT, tmp_path)

        expected_df = pd.read_csv(expected_path, dtype={"classe_codigo": str})
        output_df = pd.read_csv(tmp_path / "data" / relative, dtype={"classe_codigo": str})
        pd.testing.assert_frame_equal(output_df, expected_df, check_dtype=False)


class TestOrchestrator:
    """The orchestrator's stage tables point at real scripts."""

    def test_stage_scripts_exist(self, script_loader):
        pipeline = script_loader("pipeline.py")
        for rel_path, _, _ in pipeline.STAGE1_SCRIPTS + pipeline.STAGE2_SCRIPTS:
            assert (pipeline.SCRIPTS_DIR / rel_path).exists(), rel_path

    def test_only_ledger_stages_tolerate_missing_input(self, script_loader):
        pipeline = script_loader("pipeline.py")
        tolerant = [path for path, _, args in pipeline.STAGE1_SCRIPTS if "--allow-missing" in args]
        assert tolerant == ["stage1_convert/03_razao_contabil.py", "stage1_convert/04_razao_itens.py"]


def test_dashboard_summary_prints_both_views(pipeline_run, script_loader, capsys):
    work_dir, _ = pipeline_run
    summary = script_loader("dashboard_summary.py")

    summary.print_summary(work_dir / "data", "Todas", "Todos", "equipamento")

    out = capsys.readouterr().out
    assert "PLANEJAMENTO" in out
    assert "EXECUÇÃO" in out
    assert "R$ 4.510,00" in out  # 2026 budget total
