"""Tests for the command-line interface."""

import json
import logging

import pytest
import yaml

from src.cli import EXIT_INVALID_DATA, EXIT_MISSING_FILE, configure_logging, main


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "planner.yaml"
    path.write_text(yaml.dump({
        "daily_targets": {"calories": 1000, "protein_g": 100, "carbs_g": 200, "fat_g": 50},
        "meal_coverage_ratio": 1.0,
        "search": {"iterations": 10, "max_local_passes": 1},
    }), encoding="utf-8")
    return path


@pytest.fixture
def recipes_path(tmp_path):
    recipes = [
        {
            "id": f"r{i}",
            "title": f"Plat {i}",
            "per_serving": {"calories": 500, "protein_g": 50, "carbs_g": 100, "fat_g": 25},
            "cuisine": f"cuisine{i}",
            "category": f"category{i}",
        }
        for i in range(20)
    ]
    recipes.append({
        "id": "cookie",
        "title": "Cookie",
        "per_serving": {"calories": 250, "protein_g": 3, "carbs_g": 30, "fat_g": 12},
        "category": "Cookie",
    })
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps({"recipes": recipes}), encoding="utf-8")
    return path


class TestMain:
    """Tests for the main entry point."""

    def test_json_output_file(self, config_path, recipes_path, tmp_path, capsys):
        output_file = tmp_path / "plan.json"

        exit_code = main([
            "--config", str(config_path),
            "--recipes", str(recipes_path),
            "--output", "json",
            "--output-file", str(output_file),
            "--seed", "1",
        ])

        assert exit_code == 0
        data = json.loads(output_file.read_text(encoding="utf-8"))
        assert len(data["slots"]) == 14
        assert all(slot["recipe"]["id"] != "cookie" for slot in data["slots"])
        assert data["score"]["overall"] == pytest.approx(100.0)
        assert "Found 20 plannable recipes" in capsys.readouterr().err

    def test_markdown_to_stdout(self, config_path, recipes_path, capsys):
        exit_code = main(["--config", str(config_path), "--recipes", str(recipes_path), "--seed", "3"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "# Weekly Meal Plan" in out
        assert "## Lundi" in out

    def test_both_outputs_use_suffixes(self, config_path, recipes_path, tmp_path):
        output_file = tmp_path / "plan"

        exit_code = main([
            "--config", str(config_path),
            "--recipes", str(recipes_path),
            "--output", "both",
            "--output-file", str(output_file),
        ])

        assert exit_code == 0
        assert (tmp_path / "plan.md").exists()
        assert (tmp_path / "plan.json").exists()

    def test_same_seed_same_output(self, config_path, recipes_path, tmp_path):
        first = tmp_path / "first.json"
        second = tmp_path / "second.json"
        base = ["--config", str(config_path), "--recipes", str(recipes_path), "--output", "json", "--seed", "9"]

        main(base + ["--output-file", str(first)])
        main(base + ["--output-file", str(second)])

        assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")

    def test_include_all_categories(self, config_path, recipes_path, capsys):
        exit_code = main([
            "--config", str(config_path),
            "--recipes", str(recipes_path),
            "--include-all-categories",
        ])

        assert exit_code == 0
        assert "Found 21 plannable recipes" in capsys.readouterr().err

    def test_warnings_reported(self, config_path, tmp_path, capsys):
        recipes_path = tmp_path / "few.json"
        recipes_path.write_text(json.dumps({"recipes": [
            {"id": "r1", "title": "Seul", "per_serving": {"calories": 500, "protein_g": 50,
                                                          "carbs_g": 100, "fat_g": 25}},
        ]}), encoding="utf-8")

        exit_code = main(["--config", str(config_path), "--recipes", str(recipes_path)])

        assert exit_code == 0
        assert "13 meals short" in capsys.readouterr().err


class TestMainErrors:
    """Exit codes for bad input."""

    def test_missing_config(self, recipes_path, tmp_path):
        exit_code = main(["--config", str(tmp_path / "nope.yaml"), "--recipes", str(recipes_path)])

        assert exit_code == EXIT_MISSING_FILE

    def test_missing_recipes(self, config_path, tmp_path):
        exit_code = main(["--config", str(config_path), "--recipes", str(tmp_path / "nope.json")])

        assert exit_code == EXIT_MISSING_FILE

    def test_invalid_recipe(self, config_path, tmp_path, capsys):
        recipes_path = tmp_path / "bad.json"
        recipes_path.write_text(json.dumps({"recipes": [{"id": "r1"}]}), encoding="utf-8")

        exit_code = main(["--config", str(config_path), "--recipes", str(recipes_path)])

        assert exit_code == EXIT_INVALID_DATA
        assert "Invalid recipe data" in capsys.readouterr().err

    def test_malformed_json(self, config_path, tmp_path):
        recipes_path = tmp_path / "broken.json"
        recipes_path.write_text("{not json", encoding="utf-8")

        exit_code = main(["--config", str(config_path), "--recipes", str(recipes_path)])

        assert exit_code == EXIT_INVALID_DATA

    def test_invalid_config(self, recipes_path, tmp_path, capsys):
        config_path = tmp_path / "planner.yaml"
        config_path.write_text(yaml.dump({"daily_targets": {"calories": 2000}}), encoding="utf-8")

        exit_code = main(["--config", str(config_path), "--recipes", str(recipes_path)])

        assert exit_code == EXIT_INVALID_DATA
        assert "daily_targets.protein_g" in capsys.readouterr().err

    def test_zero_iterations_rejected(self, config_path, recipes_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_path), "--recipes", str(recipes_path), "--iterations", "0"])

        assert exc_info.value.code == 2
        assert "must be at least 1" in capsys.readouterr().err

    def test_non_numeric_search_setting(self, recipes_path, tmp_path, capsys):
        config_path = tmp_path / "planner.yaml"
        config_path.write_text(yaml.dump({
            "daily_targets": {"calories": 1000, "protein_g": 100, "carbs_g": 200, "fat_g": 50},
            "search": {"iterations": "many"},
        }), encoding="utf-8")

        exit_code = main(["--config", str(config_path), "--recipes", str(recipes_path)])

        assert exit_code == EXIT_INVALID_DATA
        assert "search.iterations" in capsys.readouterr().err

    @pytest.mark.parametrize("content", [
        [{"id": 1}],
        {"recipes": [{"id": "r1", "title": "Bol", "portions": "four", "ingredients": []}]},
    ])
    def test_malformed_recipe_file_shape(self, config_path, tmp_path, content):
        recipes_path = tmp_path / "odd.json"
        recipes_path.write_text(json.dumps(content), encoding="utf-8")

        exit_code = main(["--config", str(config_path), "--recipes", str(recipes_path)])

        assert exit_code == EXIT_INVALID_DATA


class TestConfigureLogging:
    """Log level selection from the environment."""

    def _captured_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        configure_logging()
        return calls[0]["level"]

    def test_known_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert self._captured_level(monkeypatch) == "DEBUG"

    def test_unknown_level_falls_back_to_warning(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        assert self._captured_level(monkeypatch) == "WARNING"

    def test_default_level(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        assert self._captured_level(monkeypatch) == "WARNING"
