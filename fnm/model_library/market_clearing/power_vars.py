#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for power variables
from pyomo.environ import *

from .mc_utils import add_model_attr
component_name = 'power_vars'

@add_model_attr(component_name, requires = {'data_loader': None} )
def thermal_generation_vars(fnm):
    '''
    Adds PowerGenerated, the output of each thermal generator. Its limits
    come from generation_limits and the offer curve blocks.
    '''
    model = fnm.model
    model.PowerGenerated = Var(model.ThermalGenerators, model.TimePeriods, within=NonNegativeReals)
