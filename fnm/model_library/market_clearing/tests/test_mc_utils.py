#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
Tests for the helpers in mc_utils and the reserve zone aggregation
'''
import pytest
import warnings

from fnm.common.errors import ConfigurationError
from fnm.model_library.market_clearing.mc_utils import add_model_attr, uc_time_helper, expand_slacks, SOFT_CONSTRAINTS
from fnm.model_library.market_clearing.zones import reserve_zone_members, MARKET_WIDE_ZONE

def test_expand_slacks_none():
    assert expand_slacks() == {con: None for con in SOFT_CONSTRAINTS}

def test_expand_slacks_number():
    assert expand_slacks(1e6) == {con: 1e6 for con in SOFT_CONSTRAINTS}

def test_expand_slacks_dict():
    slacks = expand_slacks({'energy_balance': 1e6})
    assert slacks['energy_balance'] == 1e6
    assert slacks['regulation_requirements'] is None
    assert slacks['operating_reserve_requirements'] is None

def test_expand_slacks_pairs():
    slacks = expand_slacks([('regulation_requirements', 1e5), ('operating_reserve_requirements', 2e5)])
    assert slacks == {'energy_balance': None,
                      'regulation_requirements': 1e5,
                      'operating_reserve_requirements': 2e5}

def test_expand_slacks_single_pair():
    slacks = expand_slacks(('energy_balance', 1e6))
    assert slacks == {'energy_balance': 1e6,
                      'regulation_requirements': None,
                      'operating_reserve_requirements': None}

def test_expand_slacks_unrecognized():
    with pytest.raises(ConfigurationError) as excinfo:
        expand_slacks({'transmission_limits': 1e6})
    assert 'transmission_limits' in str(excinfo.value)

    with pytest.raises(ConfigurationError):
        expand_slacks(('transmission_limits', 1e6))

def test_expand_slacks_bad_shape():
    with pytest.raises(ConfigurationError):
        expand_slacks('energy_balance')
    with pytest.raises(ConfigurationError):
        expand_slacks([('energy_balance', 1e6, 2e6)])
    with pytest.raises(ConfigurationError):
        expand_slacks(object())

def test_time_helper():
    TimeMapper = uc_time_helper([1,2,3])

    assert TimeMapper(None) == dict()
    assert TimeMapper({'data_type': 'time_series', 'values': [1., 2., 3.]}) == {1: 1., 2: 2., 3: 3.}
    assert TimeMapper(5.) == {1: 5., 2: 5., 3: 5.}

    mapped = TimeMapper({'G1': 2., 'G2': {'data_type': 'time_series', 'values': [1., 2., 3.]}})
    assert mapped == {('G1',1): 2., ('G1',2): 2., ('G1',3): 2.,
                      ('G2',1): 1., ('G2',2): 2., ('G2',3): 3.}

def test_time_helper_length_mismatch():
    TimeMapper = uc_time_helper([1,2,3])

    with pytest.raises(ConfigurationError):
        TimeMapper({'data_type': 'time_series', 'values': [1., 2.]})
    with pytest.raises(ConfigurationError):
        TimeMapper({'G1': {'data_type': 'time_series', 'values': [1., 2., 3., 4.]}})

def test_time_helper_curves():
    curve = [(600., 0.5), (800., 1.0)]
    TimeMapper = uc_time_helper([1,2])
    mapped = TimeMapper({'G3': curve, 'G7': {'data_type': 'time_series', 'values': [curve, curve[:1]]}})
    assert mapped[('G3',2)] == curve
    assert mapped[('G7',1)] == curve
    assert mapped[('G7',2)] == curve[:1]

class _Wrapper(object):
    pass

def test_add_model_attr():

    @add_model_attr('first_kind')
    def first_step(fnm):
        return 'first'

    @add_model_attr('second_kind', requires={'first_kind': ['first_step']})
    def second_step(fnm):
        return 'second'

    fnm = _Wrapper()
    with pytest.warns(UserWarning):
        second_step(fnm)
    assert fnm.second_kind == 'second_step'

    fnm = _Wrapper()
    assert first_step(fnm) == 'first'
    assert fnm.first_kind == 'first_step'
    with warnings.catch_warnings():
        warnings.simplefilter('error')
        second_step(fnm)

    with pytest.warns(UserWarning):
        first_step(fnm)

def test_reserve_zone_members():
    zone_tags = {'G3': '1', 'G7': '2', 'G9': '1', 'G11': None}
    members = reserve_zone_members(zone_tags)

    assert members['1'] == ['G3', 'G9']
    assert members['2'] == ['G7']
    assert members[MARKET_WIDE_ZONE] == ['G3', 'G7', 'G9', 'G11']
    assert None not in members

def test_reserve_zone_members_given_zones():
    zone_tags = {'G3': '1', 'G7': '2'}
    members = reserve_zone_members(zone_tags, zones=['1', '3', MARKET_WIDE_ZONE])

    assert members == {'1': ['G3'], '3': [], MARKET_WIDE_ZONE: ['G3', 'G7']}

def test_reserve_zone_members_empty():
    assert reserve_zone_members(dict()) == {MARKET_WIDE_ZONE: []}

def test_market_wide_tag():
    ## a generator tagged with the market-wide zone is listed there once
    members = reserve_zone_members({'G3': MARKET_WIDE_ZONE, 'G7': '2'})
    assert members[MARKET_WIDE_ZONE] == ['G3', 'G7']
    assert members['2'] == ['G7']
