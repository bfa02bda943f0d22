"""Tests for logtree.registry — logger identity, tree building, default registry."""

import threading

import pytest

from logtree import (
    InvalidLoggerNameError, LoggerRegistry, UnsupportedOperationError,
    detached, get_logger, get_registry, init_registry,
)
from logtree.levels import FINE, INFO, OFF, SEVERE, WARNING


# =============================================================================
# get_logger / detached
# =============================================================================

class TestGetLogger:
    """Get-or-create by fully-qualified name."""

    def test_same_name_same_logger(self, registry):
        assert registry.get_logger('a.b') is registry.get_logger('a.b')

    def test_empty_name_is_root(self, registry):
        assert registry.get_logger('') is registry.root

    def test_creates_missing_ancestors(self, registry):
        abc = registry.get_logger('a.b.c')
        assert 'a' in registry
        assert 'a.b' in registry
        assert abc.parent is registry.get_logger('a.b')
        assert abc.parent.parent is registry.get_logger('a')
        assert abc.parent.parent.parent is registry.root

    def test_links_children(self, registry):
        registry.get_logger('a.b')
        registry.get_logger('a.c')
        assert set(registry.get_logger('a').children) == {'b', 'c'}
        assert set(registry.root.children) == {'a'}

    def test_every_chain_ends_at_root(self, registry):
        for name in ('x', 'x.y.z', 'p.q'):
            node = registry.get_logger(name)
            while node.parent is not None:
                node = node.parent
            assert node is registry.root

    def test_leading_dot_rejected(self, registry):
        with pytest.raises(InvalidLoggerNameError, match="start with"):
            registry.get_logger('.bad')

    def test_invalid_name_is_value_error(self, registry):
        with pytest.raises(ValueError):
            registry.get_logger('.bad')

    def test_rejected_name_not_registered(self, registry):
        with pytest.raises(InvalidLoggerNameError):
            registry.get_logger('.bad')
        assert len(registry) == 1


class TestDetached:
    """Detached loggers live outside the tree."""

    def test_distinct_per_call(self, registry):
        assert registry.detached('solo') is not registry.detached('solo')

    def test_not_registered(self, registry):
        solo = registry.detached('solo')
        assert 'solo' not in registry
        assert solo not in registry.attached_loggers()
        assert solo.parent is None
        assert dict(solo.children) == {}

    def test_not_linked_to_root(self, registry):
        registry.detached('solo')
        assert 'solo' not in registry.root.children


class TestAttachedLoggers:
    """attached_loggers() lists registered loggers."""

    def test_fresh_registry_has_root_only(self, registry):
        assert registry.attached_loggers() == [registry.root]

    def test_lists_created_loggers(self, registry):
        registry.get_logger('a.b')
        names = {log.full_name for log in registry.attached_loggers()}
        assert names == {'', 'a', 'a.b'}
        assert len(registry) == 3

    def test_snapshot_is_independent(self, registry):
        snapshot = registry.attached_loggers()
        registry.get_logger('later')
        assert len(snapshot) == 1


class TestRegistrySettings:
    """Constructor arguments and reset()."""

    def test_defaults(self, registry):
        assert registry.hierarchical_logging_enabled is False
        assert registry.record_stack_trace_at == OFF
        assert registry.root.level == INFO

    def test_constructor_arguments(self):
        reg = LoggerRegistry(hierarchical=True, record_stack_trace_at=SEVERE,
                             root_level=WARNING)
        assert reg.hierarchical_logging_enabled is True
        assert reg.record_stack_trace_at == SEVERE
        assert reg.root.level == WARNING

    def test_registries_are_isolated(self, registry, hregistry):
        assert registry.get_logger('a') is not hregistry.get_logger('a')
        hregistry.get_logger('a').level = FINE
        assert registry.get_logger('a').level == INFO

    def test_reset(self, hregistry, collector):
        old_root = hregistry.root
        hregistry.get_logger('a.b').subscribe(collector, collector.on_done)
        hregistry.record_stack_trace_at = SEVERE
        hregistry.reset()
        assert collector.done == 1
        assert hregistry.root is not old_root
        assert hregistry.attached_loggers() == [hregistry.root]
        assert hregistry.hierarchical_logging_enabled is False
        assert hregistry.record_stack_trace_at == OFF

    def test_reset_orphans_old_loggers(self, hregistry):
        old_root = hregistry.root
        old_child = hregistry.get_logger('a')
        hregistry.reset()
        assert old_root.orphaned
        assert old_child.orphaned
        assert not old_root.is_root
        assert not old_root.is_detached
        assert not hregistry.root.orphaned
        assert hregistry.get_logger('a') is not old_child
        with pytest.raises(UnsupportedOperationError):
            old_child.get_child('b')

    def test_repr(self, registry):
        assert repr(registry) == '<LoggerRegistry 1 loggers, global>'


# =============================================================================
# Module-level default registry
# =============================================================================

class TestDefaultRegistry:
    """init_registry / get_registry / get_logger shortcuts."""

    def test_get_logger_uses_default(self, default_registry):
        assert get_logger('a') is default_registry.get_logger('a')
        assert get_logger() is default_registry.root

    def test_detached_uses_default_settings(self, default_registry):
        solo = detached('solo')
        assert solo.registry is default_registry
        assert 'solo' not in default_registry

    def test_init_registry_replaces_default(self, default_registry):
        reg = init_registry(hierarchical=True, root_level=FINE)
        assert get_registry() is reg
        assert reg is not default_registry
        assert reg.root.level == FINE

    def test_init_registry_applies_level_specs(self, default_registry):
        reg = init_registry(hierarchical=True, levels=['net.http:FINE', 'WARNING'])
        assert reg.get_logger('net.http').level == FINE
        assert reg.get_logger('net').level == WARNING

    def test_init_registry_applies_config(self, default_registry):
        reg = init_registry(config={"hierarchical": True,
                                    "levels": {"db": "SEVERE"}})
        assert reg.hierarchical_logging_enabled
        assert reg.get_logger('db').level == SEVERE


# =============================================================================
# Concurrency
# =============================================================================

@pytest.mark.slow
class TestConcurrency:
    """Get-or-create and lazy channel creation under contention."""

    THREADS = 16

    def _run_all(self, target):
        barrier = threading.Barrier(self.THREADS)
        results = [None] * self.THREADS

        def worker(i):
            barrier.wait()
            results[i] = target()

        threads = [threading.Thread(target=worker, args=(i,))
                   for i in range(self.THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        return results

    def test_one_logger_per_name(self, registry):
        results = self._run_all(lambda: registry.get_logger('deep.path.to.node'))
        assert all(r is results[0] for r in results)
        assert len(registry) == 5

    def test_one_channel_per_logger(self, hregistry):
        log = hregistry.get_logger('shared')
        results = self._run_all(lambda: log.on_record)
        assert all(r is results[0] for r in results)

    def test_concurrent_logging_delivers_everything(self, hregistry):
        lock = threading.Lock()
        seen = []

        def listener(record):
            with lock:
                seen.append(record)

        hregistry.root.subscribe(listener)

        def log_many():
            log = hregistry.get_logger('worker')
            for i in range(50):
                log.info(f'msg {i}')

        self._run_all(log_many)
        assert len(seen) == self.THREADS * 50
        assert len({r.sequence_number for r in seen}) == len(seen)

    def test_subscribe_races_clear_listeners(self, hregistry):
        log = hregistry.get_logger('contended')
        def churn():
            for _ in range(200):
                sub = log.subscribe(lambda record: None)
                log.clear_listeners()
                sub.cancel()
            return True

        assert all(self._run_all(churn))
