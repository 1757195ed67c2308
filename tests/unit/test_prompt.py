"""
Tests for system prompt construction
"""

from weft.agent.prompt import build_system_prompt
from weft.skills import Skill


class TestBuildSystemPrompt:
    def test_tools_are_listed_verbatim(self, add_tool):
        prompt = build_system_prompt([add_tool])
        assert "Available tools:\n" + add_tool.description + "\n" in prompt
        assert '{"action":"call_tool","tool":"<tool_name>","args":{...}}' in prompt
        assert "use_skill" not in prompt

    def test_skills_overview(self):
        skill = Skill(name="weather", description="Forecasts", usage_tips=["One city"])
        prompt = build_system_prompt(skills=[skill])
        assert '{"action":"use_skill","skill":"<skill_name>","args":{...}}' in prompt
        assert "- weather: Forecasts\n  Usage: One city\n" in prompt
        assert "Available tools:" not in prompt

    def test_final_answer_format_is_documented(self):
        assert '{"action":"final_answer","answer":"..."}' in build_system_prompt()
