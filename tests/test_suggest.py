"""
Tests for the SuggestionEngine — tab completion of whole input lines
"""

from hubline.core.suggest import (
    MAX_SUGGESTIONS, finalize, nick_fragment_start, prefix_matches,
)


class TestFinalize:

    def test_dedupes_keeping_first(self):
        assert finalize(["b", "a", "b"], "") == ["b", "a"]

    def test_drops_same_length(self):
        assert finalize(["set", "sets"], "set") == ["sets"]

    def test_caps(self):
        assert len(finalize((str(i) * 2 for i in range(100)), "x")) == MAX_SUGGESTIONS

    def test_prefix_matches(self):
        assert prefix_matches(["apple", "apricot", "banana", "ap"], "ap") == ["apple", "apricot"]


class TestNickFragment:

    def test_start_of_line(self):
        assert nick_fragment_start("bo") == 0

    def test_after_separators(self):
        assert nick_fragment_start("hi bo") == 3
        assert nick_fragment_start("alice,bo") == 6
        assert nick_fragment_start("alice:bo") == 6


class TestCommandNames:

    def test_prefix(self, hubline_factory):
        assert hubline_factory.suggest("/se") == ["/search ", "/set "]

    def test_complete_name_still_gets_space(self, hubline_factory):
        assert hubline_factory.suggest("/set") == ["/set "]

    def test_no_match(self, hubline_factory):
        assert hubline_factory.suggest("/zz") == []

    def test_all_commands(self, hubline_factory):
        found = hubline_factory.suggest("/")
        assert len(found) == MAX_SUGGESTIONS
        assert found[0] == "/accept "


class TestArguments:

    def test_setting_names(self, hubline_factory):
        found = hubline_factory.suggest("/set color_log_")
        assert "/set color_log_time" in found
        assert all(s.startswith("/set color_log_") for s in found)

    def test_setting_values(self, hubline_factory):
        assert hubline_factory.suggest("/set active t") == ["/set active true", "/set active false"]

    def test_unknown_command(self, hubline_factory):
        assert hubline_factory.suggest("/nosuch x") == []

    def test_command_without_suggester(self, hubline_factory):
        assert hubline_factory.suggest("/quit x") == []

    def test_internal_setting_values_not_offered(self, hubline_factory):
        assert hubline_factory.suggest("/set hubaddr d") == []


class TestNickCompletion:

    def test_start_of_line_gets_suffix(self, hub_env):
        assert hub_env.suggest("b") == ["Bobby: ", "bob: "]

    def test_mid_line(self, hub_env):
        assert hub_env.suggest("hi a") == ["hi alice"]

    def test_after_say(self, hub_env):
        assert hub_env.suggest("/say al") == ["/say alice: "]

    def test_msg_has_no_suffix(self, hub_env):
        assert hub_env.suggest("/msg al") == ["/msg alice"]

    def test_not_on_hub_tab(self, hubline_factory):
        assert hubline_factory.suggest("b") == []

    def test_capped(self, hub_env):
        hub = hub_env.session.current_hub
        for i in range(30):
            hub.add_user(f"user{i:02d}")
        found = hub_env.suggest("u")
        assert len(found) == MAX_SUGGESTIONS
        assert found[0] == "user00: "
