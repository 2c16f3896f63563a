#!/usr/bin/env python
# -*- coding:utf-8 -*-
"""
===============
List of classes
===============

.. autosummary::
    :nosignatures:

    MUSX

==================
Module description
==================

Deletion-based extraction [1]_ of one *minimal unsatisfiable subset* (*MUS*)
of the clause groups registered on an explanation session. Hard clauses
(added without a group index) are always active; each group is switched on
by assuming its selector literal.

.. [1] Joao Marques-Silva. *Minimal Unsatisfiability: Models, Algorithms
    and Applications*. ISMVL 2010. pp. 9-14

The following extraction procedure is implemented:

.. code-block:: python

    # oracle: SAT session (initialized)
    # assump: selectors of an unsatisfiable core

    i = 0

    while i < len(assump):
        to_test = assump[:i] + assump[(i + 1):]
        if oracle.solve(assumptions=to_test):
            i += 1
        else:
            assump = to_test

    return assump

==============
Module details
==============
"""
import logging
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from metasat.bool.sat.oracle import Oracle

logger = logging.getLogger(__name__)


class MUSX:
    """
    MUS eXtractor using the deletion-based algorithm over clause groups.

    :param oracle: explanation session whose indexed clauses form the
        candidate set
    """

    def __init__(self, oracle: "Oracle"):
        self.oracle = oracle
        self.sels = [oracle.selectors[grp] for grp in sorted(oracle.selectors)]

    def compute(self) -> Optional[List[int]]:
        """
        Compute the group indices of one MUS, or ``None`` if all groups
        together are satisfiable. An unsatisfiable core of the full group
        set serves as the over-approximation refined by :func:`_compute`.
        """
        if self.oracle.is_satisfiable(self.sels, all_groups=False):
            return None

        approx = sorted(self.oracle.core())
        logger.debug("MUS approx: %s", [self.oracle.group_of(sel) for sel in approx])

        mus = self._compute(approx)
        return sorted(self.oracle.group_of(sel) for sel in mus)

    def _compute(self, approx: List[int]) -> List[int]:
        """
        Deletion-based refinement: remove one selector at a time and keep
        it out whenever the remaining groups stay unsatisfiable together
        with the hard clauses.

        :param approx: selectors of an unsatisfiable core
        :return: selectors of an MUS
        """
        i = 0

        while i < len(approx):
            to_test = approx[:i] + approx[(i + 1):]
            clid = self.oracle.group_of(approx[i])

            if self.oracle.is_satisfiable(to_test, all_groups=False):
                logger.debug("testing group %d -> sat (keeping %d)", clid, clid)
                i += 1
            else:
                logger.debug("testing group %d -> unsat (removing %d)", clid, clid)
                approx = to_test

        return approx
