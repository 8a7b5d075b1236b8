import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from snarkkit.config import Config


def test_default_config():
    config = Config()
    assert config.zk is False
    assert config.query_instance is False
    assert config.num_proof == 0
    assert config.num_instance == ()
    assert config.accumulator_indices is None


def test_kzg_does_not_query_instances():
    config = Config.kzg()
    assert config.zk is True
    assert config.query_instance is False
    assert config.num_proof == 1
    assert config.accumulator_indices is None


def test_ipa_queries_instances():
    config = Config.ipa()
    assert config.zk is True
    assert config.query_instance is True
    assert config.num_proof == 1


def test_set_zk_leaves_original_unchanged():
    original = Config.kzg()
    changed = original.set_zk(False)
    assert changed.zk is False
    assert original.zk is True
    assert changed.num_proof == original.num_proof


def test_set_query_instance():
    config = Config.kzg().set_query_instance(True)
    assert config.query_instance is True
    assert config == Config.ipa()


@pytest.mark.parametrize("bad", [0, -1, -5])
def test_with_num_proof_rejects_non_positive(bad):
    with pytest.raises(ValueError):
        Config.kzg().with_num_proof(bad)


@given(st.integers(min_value=1, max_value=1000))
def test_with_num_proof_keeps_value(num_proof):
    config = Config.ipa().with_num_proof(num_proof)
    assert config.num_proof == num_proof
    assert config.query_instance is True


def test_with_num_instance_takes_any_iterable():
    config = Config.kzg().with_num_instance([3, 1, 4])
    assert config.num_instance == (3, 1, 4)
    assert Config.kzg().with_num_instance(iter([3, 1, 4])) == config


def test_with_accumulator_indices_roundtrip():
    indices = [(0, idx) for idx in range(16)]
    config = Config.kzg().with_num_proof(2).with_accumulator_indices(indices)
    assert list(config.accumulator_indices) == indices
    assert config.num_proof == 2


def test_with_accumulator_indices_none_clears():
    config = Config.kzg().with_accumulator_indices([(0, 1)])
    cleared = config.with_accumulator_indices(None)
    assert cleared.accumulator_indices is None
    assert config.accumulator_indices == ((0, 1),)


def test_config_is_frozen():
    config = Config.kzg()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.zk = False
    assert config.zk is True
    assert config == Config.kzg()


def test_chained_builders_match_direct_construction():
    config = (
        Config.ipa()
        .set_zk(True)
        .with_num_proof(3)
        .with_num_instance([2])
        .with_accumulator_indices([(1, 2)])
    )
    expected = Config(
        zk=True,
        query_instance=True,
        num_proof=3,
        num_instance=(2,),
        accumulator_indices=((1, 2),),
    )
    assert config == expected