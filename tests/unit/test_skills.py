"""
Tests for skill loading and orchestration
"""

import pytest

from weft.errors import SkillNotFoundError
from weft.skills import SkillOrchestrator, format_step, load_skill_files, load_skills, parse_skill

WEATHER_MD = """# Weather

Look up the forecast for a city.

## Steps
1. Call the forecast tool for {{city}}
2. Summarize for ${city} in one line

```
- not a step
```

## Usage
- Ask for one city at a time
Prefer metric units
"""


class TestParseSkill:
    def test_sections(self):
        skill = parse_skill("skills/weather.md", WEATHER_MD)
        assert skill.name == "weather"
        assert skill.description == "Look up the forecast for a city."
        assert skill.steps == [
            "Call the forecast tool for {{city}}",
            "Summarize for ${city} in one line",
        ]
        assert skill.usage_tips == ["Ask for one city at a time", "Prefer metric units"]

    def test_chinese_headings(self):
        skill = parse_skill("s.md", "说明\n\n## 步骤\n1、打开\n2、关闭\n\n## 使用建议\n- 慢一点\n")
        assert skill.steps == ["打开", "关闭"]
        assert skill.usage_tips == ["慢一点"]


class TestLoaders:
    def test_load_skills_recursive(self, tmp_path):
        (tmp_path / "nested").mkdir()
        (tmp_path / "weather.md").write_text(WEATHER_MD, encoding="utf-8")
        (tmp_path / "nested" / "notes.md").write_text("Notes skill.\n", encoding="utf-8")
        (tmp_path / "ignored.txt").write_text("nope", encoding="utf-8")

        names = sorted(s.name for s in load_skills(tmp_path))
        assert names == ["notes", "weather"]

    def test_load_skills_missing_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_skills(tmp_path / "missing")

    def test_load_skill_files_rejects_non_markdown(self, tmp_path):
        path = tmp_path / "skill.txt"
        path.write_text("x", encoding="utf-8")
        with pytest.raises(ValueError):
            load_skill_files([path])

    def test_load_skill_files_rejects_directory(self, tmp_path):
        with pytest.raises(IsADirectoryError):
            load_skill_files([tmp_path])

    def test_load_skill_files_skips_blank(self, tmp_path):
        path = tmp_path / "weather.md"
        path.write_text(WEATHER_MD, encoding="utf-8")
        assert [s.name for s in load_skill_files(["", str(path)])] == ["weather"]


class TestOrchestrator:
    @pytest.fixture
    def orchestrator(self):
        return SkillOrchestrator([parse_skill("Weather.md", WEATHER_MD)])

    def test_find_is_case_insensitive(self, orchestrator):
        assert orchestrator.find("WEATHER").name == "Weather"
        assert orchestrator.find("cooking") is None

    def test_get_unknown(self, orchestrator):
        with pytest.raises(SkillNotFoundError):
            orchestrator.get("cooking")

    def test_instructions(self, orchestrator):
        text = orchestrator.instructions("weather", {"city": "Oslo"})
        assert text.startswith("Executing skill: Weather\n")
        assert "  1. Call the forecast tool for Oslo" in text
        assert "  2. Summarize for Oslo in one line" in text
        assert "\nUsage Tips:\n  - Ask for one city at a time" in text

    def test_instructions_without_steps(self):
        orchestrator = SkillOrchestrator([parse_skill("plain.md", "Do the thing.\n")])
        assert "Instructions:\nDo the thing." in orchestrator.instructions("plain")

    def test_suggest(self, orchestrator):
        assert [s.name for s in orchestrator.suggest("forecast")] == ["Weather"]

    def test_format_step_without_params(self):
        assert format_step("{{x}}", None) == "{{x}}"
