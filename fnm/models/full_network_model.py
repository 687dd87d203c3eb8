#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
The model wrapper which the market clearing formulation steps build on.

A FullNetworkModel owns one pyomo ConcreteModel, the (in-service) ModelData
it was loaded from and the accumulator of its objective. Formulation steps
take the wrapper as their first argument, add their components to
fnm.model and tag the wrapper with their name, e.g., fnm.status_vars.
'''
from pyomo.environ import ConcreteModel, Var, Constraint

import logging
logger = logging.getLogger('fnm.models.full_network_model')

from fnm.common.errors import MissingVariableError
from fnm.model_library.market_clearing.objective import ObjectiveAccumulator
from fnm.model_library.market_clearing.params import load_params
from fnm.model_library.market_clearing.blocks import BlockType

class FullNetworkModel(object):

    def __init__(self, model_data, relax_binaries=False, name='FullNetworkModel'):
        self.model_data = model_data.clone_in_service()
        self.model = ConcreteModel(name)
        self.model.relax_binaries = relax_binaries
        self.objective = ObjectiveAccumulator(self.model)
        load_params(self, self.model_data)
        logger.debug("Loaded data into {}".format(self.name))

    @property
    def name(self):
        return self.model.name

    def _find(self, name, ctype):
        component = self.model.component(name)
        if isinstance(component, ctype):
            return component
        return None

    def find_variable(self, name):
        ''' Returns the variable called name, or None if the model has no such variable '''
        return self._find(name, Var)

    def find_constraint(self, name):
        ''' Returns the constraint called name, or None if the model has no such constraint '''
        return self._find(name, Constraint)

    def has_variable(self, name):
        return self.find_variable(name) is not None

    def has_constraint(self, name):
        return self.find_constraint(name) is not None

    def variable(self, name):
        '''
        Returns the variable called name

        Raises
        ------
        MissingVariableError
            If the model has no such variable
        '''
        var = self.find_variable(name)
        if var is None:
            raise MissingVariableError(name)
        return var

    def __str__(self):
        model = self.model
        n_vars = sum(1 for _ in model.component_objects(Var, descend_into=True))
        n_cons = sum(1 for _ in model.component_objects(Constraint, descend_into=True))
        n_bids = sum(len(model.component(bt.entities)) for bt in BlockType if bt is not BlockType.GENERATION)
        return "{}: {} variables, {} constraints, {} thermal generators, {} bids, {} reserve zones, {} time periods"\
               .format(self.name, n_vars, n_cons, len(model.ThermalGenerators), n_bids,
                       len(model.ReserveZones), len(model.TimePeriods))
