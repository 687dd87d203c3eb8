#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Logging for FNM.

Importing this module configures the 'fnm' logger, which prints the
messages of level INFO and above to stdout. Each fnm module logs to a
child of it:

.. code-block:: python

   import logging
   logger = logging.getLogger('fnm.model_library.market_clearing.blocks')

Formulation steps report the components they add with logger.debug; to see
those messages, lower the level:

.. code-block:: python

   from fnm.common.log import logger
   logger.setLevel(logging.DEBUG)
"""
import sys
import logging
log_format = '%(message)s'

logger = logging.getLogger('fnm')
logger.setLevel(logging.INFO)

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(logging.Formatter(log_format))
logger.addHandler(console_handler)
