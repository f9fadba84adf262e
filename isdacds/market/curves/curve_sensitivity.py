##############################################################################

##############################################################################

"""
Accumulator for first order sensitivities to curve nodes.

A CurveSensitivity maps each curve (by name) to a vector of weights, one
per node of the curve, holding the derivative of some quantity with respect
to the node zero rates. Sensitivities to different curves live side by side
and those to the same curve are added node by node.

The accumulator is immutable: every operation returns a new object.

Example:
    >>> s1 = CurveSensitivity.of("USD-DISC", [1.0, 5.0], [0.2, 0.8])
    >>> s2 = CurveSensitivity.of("USD-DISC", [1.0, 5.0], [0.1, 0.0])
    >>> (s1 + s2).multiplied_by(2.0).curve_vector("USD-DISC")
    array([0.6, 1.6])
"""

import numpy as np
import pandas as pd

from isdacds.utils.error import LibError
from isdacds.utils.global_vars import g_small

###############################################################################


class CurveSensitivity:
    """ Node sensitivities keyed by curve name. Each curve carries its node
    times so that results can be labelled and curves of different shapes
    never get mixed up. """

    def __init__(self,
                 entries: dict = None):
        """ Create from a dict of curve name to (node times, weights). Use
        the factory methods of and none in preference to this. """

        self._entries = {}

        if entries is None:
            return

        for name, (times, weights) in entries.items():
            times = np.asarray(times, dtype=float)
            weights = np.asarray(weights, dtype=float)
            if times.shape != weights.shape:
                raise LibError("Curve " + str(name) + " has "
                               + str(times.size) + " node times but "
                               + str(weights.size) + " weights")
            self._entries[name] = (times, weights)

    ###########################################################################

    @classmethod
    def of(cls, curve_name: str, node_times, weights):
        """ Sensitivity to a single curve. """
        return cls({curve_name: (node_times, weights)})

    @classmethod
    def none(cls):
        """ The empty sensitivity. """
        return cls()

    ###########################################################################

    def is_empty(self):
        return len(self._entries) == 0

    def curve_names(self):
        return list(self._entries.keys())

    def node_times(self, curve_name: str):
        return self._entry(curve_name)[0]

    def curve_vector(self, curve_name: str):
        """ The weights of one curve ordered by node time. """
        return self._entry(curve_name)[1]

    def get(self, curve_name: str, t: float):
        """ The weight of the node of curve_name at time t. Zero if the curve
        is absent. """

        if curve_name not in self._entries:
            return 0.0

        times, weights = self._entries[curve_name]
        idx = np.where(np.abs(times - t) < g_small)[0]
        if len(idx) == 0:
            raise LibError("Curve " + curve_name + " has no node at "
                           + str(t))
        return float(weights[idx[0]])

    def _entry(self, curve_name: str):
        if curve_name not in self._entries:
            raise LibError("No sensitivity to curve " + curve_name)
        return self._entries[curve_name]

    ###########################################################################

    def combined_with(self, other):
        """ Sum of two sensitivities. Weights of the same curve are added node
        by node and the node times must agree. """

        if isinstance(other, CurveSensitivity) is False:
            raise LibError("Can only combine with a CurveSensitivity")

        entries = dict(self._entries)

        for name, (times, weights) in other._entries.items():
            if name in entries:
                my_times, my_weights = entries[name]
                if my_times.shape != times.shape or \
                        np.any(np.abs(my_times - times) > g_small):
                    raise LibError("Node times of curve " + name
                                   + " do not match")
                entries[name] = (my_times, my_weights + weights)
            else:
                entries[name] = (times, weights)

        return CurveSensitivity(entries)

    def multiplied_by(self, factor: float):
        """ Scale all weights by a constant. """

        entries = {name: (times, weights * factor)
                   for name, (times, weights) in self._entries.items()}
        return CurveSensitivity(entries)

    def __add__(self, other):
        return self.combined_with(other)

    def __mul__(self, factor):
        return self.multiplied_by(factor)

    def __rmul__(self, factor):
        return self.multiplied_by(factor)

    ###########################################################################

    def to_dataframe(self):
        """ Long format table with columns curve, time and sensitivity. """

        rows = []
        for name, (times, weights) in self._entries.items():
            for t, w in zip(times, weights):
                rows.append({"curve": name, "time": float(t),
                             "sensitivity": float(w)})

        return pd.DataFrame(rows, columns=["curve", "time", "sensitivity"])

    ###########################################################################

    def __repr__(self):
        if self.is_empty():
            return "CurveSensitivity(EMPTY)"
        return "CurveSensitivity\n" + self.to_dataframe().to_string(index=False)

###############################################################################
