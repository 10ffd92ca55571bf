import json
from unittest.mock import patch
import cli
from bizplan.graph import generate


def test_sectionize_file(tmp_path, capsys):
    path = tmp_path / "plan.txt"
    path.write_text("Executive Summary\nWe build solar kits.\n\nMarket Analysis\nRural demand is high.\n", encoding="utf-8")
    assert cli.main(["sectionize", str(path)]) == 0
    sections = json.loads(capsys.readouterr().out)
    assert [s["title"] for s in sections] == ["Executive Summary", "Market Analysis"]


def test_generate_prints_plan(plan_input, fake_service, store, capsys):
    args = ["generate", "--user_id", "alice"]
    for field, value in plan_input.model_dump().items():
        args += [f"--{field}", value]

    def generate_with_fakes(i, user_id):
        return generate(i, user_id=user_id, completion_service=fake_service, store=store)

    with patch("cli.generate", side_effect=generate_with_fakes):
        assert cli.main(args) == 0
    assert json.loads(capsys.readouterr().out)["title"] == "SunPower Tech Business Plan"
    assert len(store.list_for_user("alice")) == 1


def test_export_missing_plan(store, capsys):
    with patch("cli.get_store", return_value=store):
        assert cli.main(["export", "missing"]) == 1
    assert capsys.readouterr().out.strip() == "Error: No plan found with id: missing"
