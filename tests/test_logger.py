"""
Tests for ctxlog.logger — the Logger facade.

End-to-end: signals → resolver → presenter, through the public
Logger methods.
"""

import dataclasses

import pytest

from ctxlog import Logger, LoggerConfig
from ctxlog.levels import DEBUG, ERROR, INFO, SEVERITIES, WARN
from ctxlog.presenter import set_presenter
from ctxlog.resolver import RULE_FILTER
from ctxlog.signals import set_reader


@pytest.fixture
def make_logger(reader, plain):
    """Build Loggers wired to the test reader and plain presenter."""
    def _make(context=None, enabled=None):
        return Logger(context=context, enabled=enabled,
                      reader=reader, presenter=plain)
    return _make


def _all_output(streams):
    return ''.join(streams[s].getvalue() for s in SEVERITIES)


# =============================================================================
# Construction
# =============================================================================

class TestConstruction:
    """Logger fields are fixed at construction."""

    def test_defaults(self):
        """No arguments → no context, no override."""
        log = Logger()
        assert log.context is None
        assert log.explicit_enabled is None
        assert log.config == LoggerConfig()

    def test_config_is_frozen(self):
        """LoggerConfig cannot be mutated."""
        log = Logger(context='app', enabled=True)
        with pytest.raises(dataclasses.FrozenInstanceError):
            log.config.context = 'other'

    def test_repr(self):
        """repr shows the bound fields."""
        assert repr(Logger('app:core', False)) == \
            "Logger(context='app:core', enabled=False)"


# =============================================================================
# Severity methods
# =============================================================================

class TestSeverityMethods:
    """debug/info/warn/error emit on their own channels."""

    def test_each_method_uses_its_channel(self, make_logger, streams):
        """Each method writes a labelled line to its severity stream."""
        log = make_logger('app:core')
        log.debug('d')
        log.info('i', {'version': 1, 'ok': True})
        log.warn('w')
        log.error('e', 1, 2)
        assert streams[DEBUG].getvalue() == '[DEBUG] [app:core] d\n'
        assert streams[INFO].getvalue() == \
            "[INFO] [app:core] i {'version': 1, 'ok': True}\n"
        assert streams[WARN].getvalue() == '[WARN] [app:core] w\n'
        assert streams[ERROR].getvalue() == '[ERROR] [app:core] e 1 2\n'

    def test_warning_alias(self, make_logger, streams):
        """warning() is warn()."""
        make_logger().warning('careful')
        assert streams[WARN].getvalue() == '[WARN] careful\n'

    def test_no_context_label(self, make_logger, streams):
        """Without a context only the severity is shown."""
        make_logger().info('plain')
        assert streams[INFO].getvalue() == '[INFO] plain\n'

    def test_disabled_emits_nothing(self, make_logger, streams):
        """A disabled logger writes nothing on any channel."""
        log = make_logger('off', enabled=False)
        log.debug('x')
        log.info('x')
        log.warn('x')
        log.error('x')
        assert _all_output(streams) == ''

    def test_every_severity_passes_when_enabled(self, make_logger, environ, streams):
        """There is no level threshold: enabled means all four."""
        environ['DEBUG'] = 'app:*'
        log = make_logger('app:core')
        for severity in SEVERITIES:
            getattr(log, severity)('m')
        for severity in SEVERITIES:
            assert streams[severity].getvalue()


# =============================================================================
# Enablement through the logger
# =============================================================================

class TestEnablement:
    """Resolver behaviour observed through Logger output."""

    def test_forced_on_in_production_with_hard_off(self, make_logger, settings, environ, streams):
        """enabled=True always emits."""
        settings.set('DISABLE_LOGS', 'true')
        environ['PYTHON_ENV'] = 'production'
        make_logger('on', enabled=True).info('forced on via instance')
        assert streams[INFO].getvalue() == '[INFO] [on] forced on via instance\n'

    def test_hard_off_silences_unforced(self, make_logger, settings, streams):
        """DISABLE_LOGS silences every logger without an override."""
        settings.set('DISABLE_LOGS', 'TRUE')
        settings.set('LOGS_ENABLED', 'true')
        make_logger('app:core').info('x')
        make_logger().error('x')
        assert _all_output(streams) == ''

    def test_filters_select_contexts(self, make_logger, environ, streams):
        """The documented filter example selects app:core and svc:beta."""
        environ['DEBUG'] = 'app:*,-app:noise,svc:beta'
        for context in ('app:core', 'app:noise', 'svc:beta', 'other:x'):
            make_logger(context).info('hi')
        assert streams[INFO].getvalue().splitlines() == [
            '[INFO] [app:core] hi',
            '[INFO] [svc:beta] hi',
        ]

    def test_production_default(self, make_logger, environ, streams):
        """Silent in production, on elsewhere."""
        log = make_logger('app:core')
        environ['PYTHON_ENV'] = 'production'
        log.info('hidden')
        environ['PYTHON_ENV'] = 'staging'
        log.info('shown')
        assert streams[INFO].getvalue() == '[INFO] [app:core] shown\n'

    def test_enabled_property_is_live(self, make_logger, settings):
        """enabled reflects the current signals."""
        log = make_logger('app:core')
        assert log.enabled is True
        settings.set('DEBUG', 'svc:*')
        assert log.enabled is False

    def test_explain(self, make_logger, environ):
        """explain() reports the deciding rule."""
        environ['DEBUG'] = 'svc:*'
        decision = make_logger('app:core').explain()
        assert decision.enabled is False
        assert decision.rule == RULE_FILTER
        assert 'app:core' in decision.detail

    def test_module_defaults(self, reader, plain, environ, streams):
        """Without injection, the module-level reader and presenter are used."""
        set_reader(reader)
        set_presenter(plain)
        environ['DEBUG'] = 'app:*'
        Logger(context='app:core').info('via defaults')
        Logger(context='svc:beta').info('filtered')
        assert streams[INFO].getvalue() == '[INFO] [app:core] via defaults\n'

    def test_default_wiring_writes_to_stdout(self, capsys, monkeypatch):
        """A bare Logger writes plain text to the real channels."""
        set_presenter(None)
        monkeypatch.setattr('ctxlog.presenter.has_rich_console',
                            lambda stderr=False: False)
        Logger(context='svc').info('to stdout')
        Logger(context='svc').error('to stderr')
        captured = capsys.readouterr()
        assert captured.out == '[INFO] [svc] to stdout\n'
        assert captured.err == '[ERROR] [svc] to stderr\n'


# =============================================================================
# Grouping
# =============================================================================

class TestGroup:
    """Logger.group gating and nesting."""

    def test_group_nests_logs(self, make_logger, streams):
        """Logs made in the body are nested under the header."""
        log = make_logger('app:core')
        log.group('Compute things', lambda: (
            log.info('step 1'),
            log.info('step 2'),
        ), False, 'info')
        assert streams[INFO].getvalue().splitlines() == [
            '[INFO] [app:core] Compute things',
            '  [INFO] [app:core] step 1',
            '  [INFO] [app:core] step 2',
        ]

    def test_group_level_selects_channel(self, make_logger, streams):
        """The level argument picks the header severity."""
        log = make_logger('db')
        log.group('Slow queries', lambda: None, level=WARN)
        assert streams[WARN].getvalue() == '[WARN] [db] Slow queries\n'

    def test_default_level_is_info(self, make_logger, streams):
        """Without a level the header is info."""
        make_logger().group('G', lambda: None)
        assert streams[INFO].getvalue() == '[INFO] G\n'

    def test_disabled_group_skips_body(self, make_logger, streams):
        """A disabled logger never runs the body and writes nothing."""
        calls = []
        make_logger('off', enabled=False).group('G', lambda: calls.append(1))
        assert calls == []
        assert _all_output(streams) == ''

    def test_filtered_group_skips_body(self, make_logger, environ, streams):
        """Group gating follows context filters too."""
        environ['DEBUG'] = 'app:*,-app:noise'
        calls = []
        make_logger('app:noise').group('G', lambda: calls.append(1))
        assert calls == []

    def test_body_runs_once_synchronously(self, make_logger):
        """The body runs exactly once before group() returns."""
        calls = []
        make_logger().group('G', lambda: calls.append('ran'))
        assert calls == ['ran']

    def test_nested_group_across_loggers(self, make_logger, streams):
        """Groups from different loggers on one presenter nest together."""
        outer = make_logger('outer')
        inner = make_logger('inner')
        outer.group('O', lambda: inner.group('I', lambda: inner.debug('x'), level=INFO))
        assert streams[INFO].getvalue().splitlines() == [
            '[INFO] [outer] O',
            '  [INFO] [inner] I',
        ]
        assert streams[DEBUG].getvalue() == '    [DEBUG] [inner] x\n'

    def test_unknown_level_raises(self, make_logger):
        """An unknown level is a caller error."""
        with pytest.raises(ValueError, match="Unknown severity"):
            make_logger().group('G', lambda: None, level='fatal')
