#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
Tests for the objective accumulator and the cost terms added to it
'''
import pytest

from pyomo.environ import ConcreteModel, Var, value, minimize, maximize
from pyomo.repn import generate_standard_repn

from fnm.common.errors import MissingVariableError
from fnm.data.tests.fake_system import fake_3bus_model_data
from fnm.models.full_network_model import FullNetworkModel
from fnm.model_library.market_clearing.blocks import BlockType
from fnm.model_library.market_clearing.objective import ObjectiveAccumulator, variable_cost, linear_cost
from fnm.model_library.market_clearing.status_vars import commitment_vars
from fnm.model_library.market_clearing.power_vars import thermal_generation_vars
from fnm.model_library.market_clearing.reserve_vars import ancillary_service_vars
from fnm.model_library.market_clearing.bid_vars import bid_vars
from fnm.model_library.market_clearing.production_costs import block_cost, thermal_variable_cost, thermal_noload_cost
from fnm.model_library.market_clearing.startup_costs import thermal_startup_cost
from fnm.model_library.market_clearing.ancillary_costs import ancillary_service_costs

def _linear_terms(expr):
    repn = generate_standard_repn(expr, compute_values=True)
    assert repn.is_linear()
    terms = { (v.parent_component().name, v.index()) : c for v, c in zip(repn.linear_vars, repn.linear_coefs) }
    return terms, value(repn.constant)

def _uc_fnm():
    fnm = FullNetworkModel(fake_3bus_model_data())
    commitment_vars(fnm)
    thermal_generation_vars(fnm)
    return fnm

def test_accumulator_creates_objective():
    model = ConcreteModel()
    model.x = Var()
    acc = ObjectiveAccumulator(model)

    assert acc.objective is None
    obj = acc.add(2*model.x)

    assert obj is model.TotalCostObjective
    assert acc.objective is obj
    assert obj.sense == minimize

def test_accumulator_sums():
    model = ConcreteModel()
    model.x = Var()
    model.y = Var()
    acc = ObjectiveAccumulator(model)

    acc.add(2*model.x)
    acc.add(3*model.x + model.y + 1.)

    terms, constant = _linear_terms(acc.objective.expr)
    assert terms == {('x', None): 5., ('y', None): 1.}
    assert constant == 1.

def test_accumulator_minimizes():
    model = ConcreteModel()
    model.x = Var()
    acc = ObjectiveAccumulator(model, name='Cost')

    acc.add(model.x)
    model.Cost.sense = maximize
    acc.add(model.x)

    assert model.Cost.sense == minimize

def test_order_independence():
    fnm_a = _uc_fnm()
    thermal_variable_cost(fnm_a)
    thermal_noload_cost(fnm_a)
    thermal_startup_cost(fnm_a)

    fnm_b = _uc_fnm()
    thermal_startup_cost(fnm_b)
    thermal_noload_cost(fnm_b)
    thermal_variable_cost(fnm_b)

    terms_a, constant_a = _linear_terms(fnm_a.objective.objective.expr)
    terms_b, constant_b = _linear_terms(fnm_b.objective.objective.expr)
    assert terms_a == terms_b
    assert constant_a == constant_b

def test_thermal_variable_cost():
    fnm = _uc_fnm()
    thermal_variable_cost(fnm)

    expected = dict()
    for g, prices in (('G3', (600., 800., 825.)), ('G7', (400., 600., 625.))):
        for t in (1,2):
            for q, price in enumerate(prices, start=1):
                expected['PowerGeneratedBlock', (g,t,q)] = price

    terms, constant = _linear_terms(fnm.objective.objective.expr)
    assert terms == expected
    assert constant == 0.

def test_variable_cost_ragged():
    fnm = _uc_fnm()
    model = fnm.model
    block_cost(fnm, BlockType.GENERATION)

    n_blocks = {('G3',1): 1, ('G3',2): 3, ('G7',1): 0, ('G7',2): 2}
    prices = {key: [10., 20., 30.] for key in n_blocks}
    cost = variable_cost(fnm, model.ThermalGenerators, model.TimePeriods, n_blocks, prices, BlockType.GENERATION)

    terms, _ = _linear_terms(cost)
    assert terms == {('PowerGeneratedBlock', ('G3',1,1)): 10.,
                     ('PowerGeneratedBlock', ('G3',2,1)): 10.,
                     ('PowerGeneratedBlock', ('G3',2,2)): 20.,
                     ('PowerGeneratedBlock', ('G3',2,3)): 30.,
                     ('PowerGeneratedBlock', ('G7',2,1)): 10.,
                     ('PowerGeneratedBlock', ('G7',2,2)): 20.}

def test_variable_cost_missing_blocks():
    fnm = _uc_fnm()
    model = fnm.model
    with pytest.raises(MissingVariableError):
        variable_cost(fnm, model.ThermalGenerators, model.TimePeriods,
                      {}, {}, BlockType.GENERATION)

def test_bid_cost_sense():
    fnm = _uc_fnm()
    bid_vars(fnm)
    block_cost(fnm, BlockType.DECREMENT)
    block_cost(fnm, BlockType.INCREMENT)

    terms, _ = _linear_terms(fnm.objective.objective.expr)
    assert terms[('DecrementBlock', ('DB1',1,1))] == -650.
    assert terms[('DecrementBlock', ('DB1',2,2))] == -500.
    assert terms[('IncrementBlock', ('IB1',1,2))] == 700.

def test_noload_and_startup_costs():
    fnm = _uc_fnm()
    thermal_noload_cost(fnm)
    thermal_startup_cost(fnm)

    terms, _ = _linear_terms(fnm.objective.objective.expr)
    assert terms[('UnitOn', ('G3',1))] == 200.
    assert terms[('UnitOn', ('G7',2))] == 100.
    assert terms[('UnitStart', ('G3',2))] == 300.
    assert terms[('UnitStart', ('G7',1))] == 150.

def test_noload_cost_fixed_commitment():
    fnm = FullNetworkModel(fake_3bus_model_data())
    cost = thermal_noload_cost(fnm)
    assert cost == pytest.approx(2*(200.+100.))

def test_ancillary_service_costs():
    fnm = _uc_fnm()
    ancillary_service_vars(fnm)
    ancillary_service_costs(fnm)

    terms, _ = _linear_terms(fnm.objective.objective.expr)
    assert terms[('RegulationReserve', ('G3',1))] == 20000.
    assert terms[('SpinningReserve', ('G7',1))] == 15000.
    assert terms[('OnlineSupplementalReserve', ('G3',2))] == 35000.
    assert terms[('OfflineSupplementalReserve', ('G7',2))] == 20000.
    assert len(terms) == 16

def test_linear_cost_missing_variable():
    fnm = FullNetworkModel(fake_3bus_model_data())
    with pytest.raises(MissingVariableError) as excinfo:
        linear_cost(fnm, 'UnitStart', fnm.model.StartupCost, fnm.model.ThermalGenerators)
    assert excinfo.value.needed_by == 'linear_cost'
