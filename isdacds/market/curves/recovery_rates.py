##############################################################################

##############################################################################

from isdacds.utils.date import Date
from isdacds.utils.error import LibError
from isdacds.utils.helpers import label_to_string

###############################################################################


class ConstantRecoveryRate:
    """ Recovery rate of a legal entity assumed constant through time. The
    ISDA model only supports this form. """

    def __init__(self,
                 value_dt: Date,
                 recovery_rate: float,
                 legal_entity: str = ""):

        if isinstance(value_dt, Date) is False:
            raise LibError("Valuation date must be a Date")

        if recovery_rate < 0.0 or recovery_rate > 1.0:
            raise LibError("Recovery rate must be in [0, 1] and not "
                           + str(recovery_rate))

        self._value_dt = value_dt
        self._recovery_rate = float(recovery_rate)
        self._legal_entity = legal_entity

    ###########################################################################

    @property
    def value_dt(self):
        return self._value_dt

    @property
    def legal_entity(self):
        return self._legal_entity

    def recovery_rate(self, dt: Date = None):
        """ The recovery rate, the same for every date. """
        return self._recovery_rate

    ###########################################################################

    def __repr__(self):
        s = label_to_string("OBJECT TYPE", type(self).__name__)
        s += label_to_string("LEGAL ENTITY", self._legal_entity)
        s += label_to_string("RECOVERY RATE", self._recovery_rate, "")
        return s

###############################################################################
