#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
Tests for the FullNetworkModel wrapper and the data it loads
'''
import pytest

from pyomo.environ import Var, Constraint, value

from fnm.common.errors import MissingVariableError
from fnm.data.tests.fake_system import fake_3bus_model_data
from fnm.models.full_network_model import FullNetworkModel
from fnm.model_library.market_clearing.zones import MARKET_WIDE_ZONE, generators_by_reserve_zone
from fnm.model_library.market_clearing.power_vars import thermal_generation_vars
from fnm.model_library.market_clearing.generation_limits import generation_limits

def test_registry():
    fnm = FullNetworkModel(fake_3bus_model_data())

    assert fnm.find_variable('PowerGenerated') is None
    assert not fnm.has_variable('PowerGenerated')
    with pytest.raises(MissingVariableError):
        fnm.variable('PowerGenerated')

    thermal_generation_vars(fnm)
    generation_limits(fnm)

    assert fnm.find_variable('PowerGenerated') is fnm.model.PowerGenerated
    assert fnm.has_variable('PowerGenerated')
    assert fnm.variable('PowerGenerated') is fnm.model.PowerGenerated
    assert isinstance(fnm.find_constraint('EnforceGeneratorOutputLimitsPartB'), Constraint)
    assert fnm.has_constraint('EnforceGeneratorOutputLimitsPartA')

    ## components of another kind are not found
    assert fnm.find_variable('EnforceGeneratorOutputLimitsPartA') is None
    assert fnm.find_constraint('PowerGenerated') is None
    assert fnm.find_variable('ThermalGenerators') is None

def test_tags():
    fnm = FullNetworkModel(fake_3bus_model_data())
    assert fnm.data_loader == 'load_params'
    thermal_generation_vars(fnm)
    assert fnm.power_vars == 'thermal_generation_vars'

def test_str():
    fnm = FullNetworkModel(fake_3bus_model_data(n_periods=3), name='Market')
    thermal_generation_vars(fnm)
    summary = str(fnm)
    assert summary.startswith('Market:')
    assert '1 variables' in summary
    assert '2 thermal generators' in summary
    assert '3 bids' in summary
    assert '3 time periods' in summary

def test_model_data_not_modified():
    md = fake_3bus_model_data()
    md.data['elements']['generator']['G7']['in_service'] = False
    del md.data['elements']['reserve_zone']

    fnm = FullNetworkModel(md)

    assert list(fnm.model.ThermalGenerators) == ['G3']
    assert 'reserve_zone' not in md.data['elements']
    assert 'G7' in md.data['elements']['generator']

def test_load_params():
    fnm = FullNetworkModel(fake_3bus_model_data())
    m = fnm.model

    assert list(m.TimePeriods) == [1, 2]
    assert value(m.TimePeriodLengthHours) == 1.
    assert list(m.ThermalGenerators) == ['G3', 'G7']
    assert value(m.MaximumPowerOutput['G3',2]) == 8.0
    assert value(m.RegulationMaximumOutput['G7',1]) == 7.5
    assert value(m.CommitmentStatus['G3',1]) == 1
    assert m.OfferCurves['G7',2] == [(400., 0.5), (600., 1.0), (625., 5.0)]
    assert m.IncrementCurves['IB1',1] == [(300., 0.2), (700., 0.3)]
    assert list(m.PriceSensitiveDemandBids) == ['PSD1']
    assert value(m.TotalDemand[1]) == 2.0
    assert value(m.TotalDemand[2]) == 2.5
    assert value(m.UnitOnT0['G3']) == 1
    assert value(m.PowerGeneratedT0['G7']) == 1.0
    assert value(m.InitialTimePeriodsOnLine['G3']) == 0
    assert len(m.RampingGenerators) == 0

def test_load_reserve_zones():
    fnm = FullNetworkModel(fake_3bus_model_data())
    m = fnm.model

    assert set(m.ReserveZones) == {'1', '2', MARKET_WIDE_ZONE}
    assert value(m.RegulationRequirement[MARKET_WIDE_ZONE,1]) == 0.8
    assert value(m.OperatingReserveRequirement['2',2]) == 0.5
    assert list(m.RegulationProviders) == ['G3', 'G7']

    zone_generators = generators_by_reserve_zone(fnm)
    assert zone_generators == {'1': ['G3'], '2': ['G7'], MARKET_WIDE_ZONE: ['G3', 'G7']}

def test_load_defaults():
    md = fake_3bus_model_data()
    g7 = md.data['elements']['generator']['G7']
    for attr in ('regulation_min', 'regulation_max', 'initial_status', 'initial_p_output', 'regulation_cost'):
        del g7[attr]
    g7['ancillary_services'] = ['spinning']
    g7['ramp_up_60min'] = 3.0

    m = FullNetworkModel(md).model

    assert value(m.RegulationMinimumOutput['G7',1]) == 0.5
    assert value(m.RegulationMaximumOutput['G7',1]) == 8.0
    assert value(m.UnitOnT0['G7']) == 1
    assert value(m.PowerGeneratedT0['G7']) == 0.5
    assert list(m.RegulationProviders) == ['G3']
    assert list(m.SpinningProviders) == ['G3', 'G7']

    assert list(m.RampingGenerators) == ['G7']
    assert value(m.NominalRampDownLimit['G7']) == 3.0
    assert value(m.ScaledNominalRampUpLimit['G7',1]) == 3.0
    assert value(m.StartupRampLimit['G7',1]) == pytest.approx(2.0)

def test_initial_time_periods_offline():
    md = fake_3bus_model_data()
    g7 = md.data['elements']['generator']['G7']
    g7['initial_status'] = -1.
    g7['initial_p_output'] = 0.
    g7['min_down_time'] = 3.

    m = FullNetworkModel(md).model

    assert value(m.UnitOnT0['G7']) == 0
    assert value(m.InitialTimePeriodsOffLine['G7']) == 2
    assert value(m.InitialTimePeriodsOffLine['G3']) == 0

def test_time_series_offer_curve():
    md = fake_3bus_model_data()
    md.data['elements']['generator']['G3']['offer_curve'] = {'data_type': 'time_series',
                                                             'values': [[(600., 0.5), (800., 1.0)], [(650., 2.0)]]}
    m = FullNetworkModel(md).model

    assert m.OfferCurves['G3',1] == [(600., 0.5), (800., 1.0)]
    assert m.OfferCurves['G3',2] == [(650., 2.0)]
