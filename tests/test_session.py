"""
Tests for Session — tabs, hubs, grants and setting side effects
"""

import logging

from hubline.session import Hub, HubState, MessageLog, TabKind, user_uid
from hubline.settings import GLOBAL, ChangeEffect


class TestHub:

    def test_user_ids_stable(self):
        assert user_uid(1, "alice") == user_uid(1, "alice")
        assert user_uid(1, "alice") != user_uid(2, "alice")
        assert user_uid(1, "alice") != user_uid(1, "Alice")

    def test_lookup_is_case_sensitive(self):
        hub = Hub(1, "#h")
        hub.add_user("alice")
        assert hub.user_by_nick("alice") is not None
        assert hub.user_by_nick("Alice") is None

    def test_nick_sanitized(self):
        hub = Hub(1, "#h")
        user = hub.add_user("ev\x1b[2Jil")
        assert user.nick == "ev[2Jil"

    def test_remove_user(self):
        hub = Hub(1, "#h")
        hub.add_user("alice")
        hub.remove_user("alice")
        assert hub.users == {}

    def test_suggest_users(self):
        hub = Hub(1, "#h")
        for nick in ("bob", "Bobby", "alice"):
            hub.add_user(nick)
        assert hub.suggest_users("BO") == ["Bobby", "bob"]
        assert hub.suggest_users("", limit=1) == ["Bobby"]

    def test_states(self):
        hub = Hub(1, "#h")
        assert hub.idle and not hub.connected and not hub.nick_valid
        hub.state = HubState.CONNECTED
        assert hub.connected and not hub.nick_valid and not hub.idle
        hub.state = HubState.LOGGED_IN
        assert hub.nick_valid

    def test_reconnect_pending_is_not_idle(self):
        hub = Hub(1, "#h")
        hub.reconnect_pending = True
        assert not hub.idle


class TestMessageLog:

    def test_forwards_to_sink(self):
        seen = []
        log = MessageLog(sink=seen.append)
        log.write("hello")
        assert seen == ["hello"]
        assert log.last == "hello"
        assert "hello" in log

    def test_clear(self):
        log = MessageLog()
        log.write("x")
        log.clear()
        assert log.last is None


class TestTabs:

    def test_starts_on_main(self, hubline_factory):
        session = hubline_factory.session
        assert session.current is session.main_tab
        assert session.scope() == GLOBAL
        assert session.current_hub is None

    def test_open_hub_creates_scope(self, hubline_factory):
        session = hubline_factory.session
        tab = session.open_hub("example")
        assert tab.kind is TabKind.HUB
        assert tab.name == "#example"
        assert session.current is tab
        assert hubline_factory.store.scope_for_hubname("example") == tab.hub.id
        assert session.scope() == tab.hub.id

    def test_reopen_reuses_scope(self, hubline_factory):
        session = hubline_factory.session
        first = session.open_hub("example").hub.id
        session.close_tab(session.current)
        assert session.open_hub("example").hub.id == first

    def test_adc_from_stored_address(self, hubline_factory):
        session = hubline_factory.session
        hub = session.open_hub("example").hub
        hubline_factory.store.set_raw(hub.id, "hubaddr", "adcs://h:411/")
        session.close_tab(session.current)
        assert session.open_hub("example").hub.adc is True

    def test_hub_tab_with_or_without_hash(self, hub_env):
        assert hub_env.session.hub_tab("example") is hub_env.session.hub_tab("#example")
        assert hub_env.session.hub_tab("other") is None

    def test_main_cannot_close(self, hubline_factory):
        session = hubline_factory.session
        assert session.close_tab(session.main_tab) is False
        assert session.tabs == [session.main_tab]

    def test_close_hub_closes_private_tabs(self, hub_env):
        session = hub_env.session
        hub = session.current_hub
        hub_tab = session.hub_tab("example")
        hub_env.open_private(hub, "alice")
        assert session.close_tab(hub_tab) is True
        assert session.tabs == [session.main_tab]
        assert session.current is session.main_tab
        assert hub.id not in session.hubs
        hub_env.services.disconnect.assert_called_once_with(hub)

    def test_close_idle_hub_does_not_disconnect(self, hubline_factory):
        session = hubline_factory.session
        hubline_factory.add_hub("quiet")
        session.close_tab(session.current)
        hubline_factory.services.disconnect.assert_not_called()

    def test_private_tab_reused(self, hub_env):
        hub = hub_env.session.current_hub
        first = hub_env.open_private(hub, "alice")
        hub_env.session.select(hub_env.session.main_tab)
        second = hub_env.open_private(hub, "alice")
        assert first is second
        assert first.name == "~alice"
        assert hub_env.session.current is first

    def test_private_tab_scope_is_hub(self, hub_env):
        hub = hub_env.session.current_hub
        hub_env.open_private(hub, "alice")
        assert hub_env.session.scope() == hub.id


class TestDisconnect:

    def test_resets_state(self, hub_env):
        hub = hub_env.session.current_hub
        hub.reconnect_pending = True
        hub_env.session.disconnect(hub)
        assert hub.state is HubState.IDLE
        assert hub.reconnect_pending is False
        hub_env.services.disconnect.assert_called_once_with(hub)


class TestGrants:

    def test_grant_and_revoke(self, hub_env):
        user = hub_env.session.current_hub.user_by_nick("alice")
        hub_env.session.grant(user)
        assert hub_env.session.grant_list() == [user.uid]
        assert hub_env.session.revoke(user.uid) is True
        assert hub_env.session.revoke(user.uid) is False

    def test_user_by_uid_across_hubs(self, hub_env):
        other = hub_env.add_hub("other", users=["carol"], select=False)
        carol = other.user_by_nick("carol")
        assert hub_env.session.user_by_uid(carol.uid) is carol
        assert hub_env.session.user_by_uid(12345) is None


class TestIdentity:

    def test_generates_nick(self, hubline_factory):
        hubline_factory.backend.set(GLOBAL, "nick", None)
        hubline_factory.session.ensure_identity()
        assert hubline_factory.store.raw(GLOBAL, "nick").startswith("hubline_")

    def test_keeps_existing_nick(self, hubline_factory):
        hubline_factory.session.ensure_identity()
        assert hubline_factory.store.raw(GLOBAL, "nick") == "tester"


class TestSettingEffects:

    def test_hubname_retitles_tab(self, hub_env):
        hub = hub_env.session.current_hub
        hub_env.store.assign(hub.id, "hubname", "renamed")
        assert hub.name == "#renamed"
        assert hub_env.session.current.name == "#renamed"
        assert hub_env.session.hub_tab("renamed") is hub_env.session.current

    def test_log_debug_switches_level(self, hubline_factory):
        logger = logging.getLogger("hubline")
        original = logger.level
        try:
            hubline_factory.store.assign(GLOBAL, "log_debug", "on")
            assert logger.level == logging.DEBUG
            hubline_factory.store.assign(GLOBAL, "log_debug", "off")
            assert logger.level == logging.WARNING
        finally:
            logger.setLevel(original)

    def test_password_sent_when_waiting(self, hubline_factory):
        hub = hubline_factory.add_hub("h")
        hub.state = HubState.CONNECTED
        hubline_factory.store.assign(hub.id, "password", "secret")
        hubline_factory.services.send_password.assert_called_once_with(hub, None)

    def test_password_not_sent_when_logged_in(self, hub_env):
        hub = hub_env.session.current_hub
        hub_env.store.assign(hub.id, "password", "secret")
        hub_env.services.send_password.assert_not_called()

    def test_unconvertible_connection_warns(self, hubline_factory):
        hubline_factory.log.clear()
        hubline_factory.store.assign(GLOBAL, "connection", "fast")
        assert hubline_factory.log.lines == [
            "Couldn't convert `fast' to bytes/second, won't broadcast upload speed on ADC."
            " See `/help set connection' for more information."
        ]

    def test_connection_speed_accepted(self, hubline_factory):
        hubline_factory.log.clear()
        hubline_factory.store.assign(GLOBAL, "connection", "10")
        assert hubline_factory.log.lines == []

    def test_other_effects_forwarded(self, hubline_factory):
        hubline_factory.store.assign(GLOBAL, "slots", "3")
        hubline_factory.services.setting_effect.assert_called_once_with(ChangeEffect.HUB_INFO, GLOBAL)

    def test_listen_settings_trigger_two_effects(self, hubline_factory):
        hubline_factory.store.assign(GLOBAL, "active", "true")
        effects = [c.args[0] for c in hubline_factory.services.setting_effect.call_args_list]
        assert effects == [ChangeEffect.LISTEN, ChangeEffect.HUB_INFO]
