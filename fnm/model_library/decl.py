#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Declarations of pyomo components from plain Python index data
"""
import pyomo.environ as pe

def declare_set(setname, model, index_set, **kwargs):
    '''
    Adds a Set called setname, initialized from the iterable index_set,
    to model and returns it. The set is ordered unless kwargs say otherwise.
    '''
    kwargs.setdefault('ordered', True)
    pyomo_set = pe.Set(initialize=index_set, **kwargs)
    model.add_component(setname, pyomo_set)
    return pyomo_set
