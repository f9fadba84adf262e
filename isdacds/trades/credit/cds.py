##############################################################################

##############################################################################

"""
Single name credit default swap contract.

A CDS exchanges a running premium (the fixed coupon, paid quarterly on the
notional and accrued on default) against a payment of (1 - R) times the
notional if the reference entity defaults before maturity. The contract
here is the standard ISDA one:

- Coupons accrue from the accrual start date to maturity on a backward
  generated schedule, payment dates are business day adjusted and the last
  period runs to the unadjusted maturity.
- When protection starts at the beginning of the day the accrual of each
  period is shifted by one day: the effective dates are one day earlier
  and the last accrual period ends one day after maturity.
- The step-in date (protection start for a trade done today) is the
  valuation date plus one calendar day and cash settles three business
  days after the valuation date.

Example:
    >>> cds = CDS(
    ...     accrual_start_dt=Date(20, 3, 2024),
    ...     maturity_dt_or_tenor=Date(20, 6, 2029),
    ...     running_coupon=0.01,
    ...     notional=10_000_000,
    ...     protection_type=ProtectionTypes.BUY,
    ...     legal_entity="ACME"
    ... )
    >>> cds.step_in_dt(Date(15, 5, 2024))
    16-MAY-2024
    >>> cds.print_periods()
"""

from dataclasses import dataclass

from isdacds.utils.error import LibError
from isdacds.utils.date import Date
from isdacds.utils.day_count import DayCountTypes, DayCount
from isdacds.utils.frequency import FrequencyTypes
from isdacds.utils.calendar import CalendarTypes, DateGenRuleTypes
from isdacds.utils.calendar import Calendar, BusDayAdjustTypes
from isdacds.utils.schedule import Schedule
from isdacds.utils.helpers import check_argument_types, label_to_string
from isdacds.utils.helpers import format_table
from isdacds.utils.global_types import InstrumentTypes, ProtectionTypes
from isdacds.utils.global_types import AccrualOnDefaultFormulae, PriceTypes
from isdacds.utils.currency import CurrencyTypes

###############################################################################


@dataclass(frozen=True)
class CreditCouponPeriod:
    """ One accrual period of the premium leg. """

    start_dt: Date
    end_dt: Date
    effective_start_dt: Date
    effective_end_dt: Date
    payment_dt: Date
    year_frac: float

    def contains(self, dt: Date):
        """ True if dt is in [start, end). """
        return self.start_dt <= dt < self.end_dt

###############################################################################


class CDS:
    """
    Credit default swap on a single legal entity.

    Pricing convention:
    - Protection buyer pays the running coupon and receives the protection
      leg; its notional is normalised to +N and a seller's to -N
    - The premium accrued since the last coupon date is paid on default
      when pay_accrued_on_default is True
    - Clean price = dirty price - accrued premium at the step-in date
    """

    def __init__(self,
                 accrual_start_dt: Date,
                 maturity_dt_or_tenor: (Date, str),
                 running_coupon: float,
                 notional: float = 1_000_000.0,
                 protection_type: ProtectionTypes = ProtectionTypes.BUY,
                 currency: CurrencyTypes = CurrencyTypes.USD,
                 legal_entity: str = "",
                 freq_type: FrequencyTypes = FrequencyTypes.QUARTERLY,
                 dc_type: DayCountTypes = DayCountTypes.ACT_360,
                 cal_type: CalendarTypes = CalendarTypes.WEEKEND,
                 bd_type: BusDayAdjustTypes = BusDayAdjustTypes.FOLLOWING,
                 dg_type: DateGenRuleTypes = DateGenRuleTypes.BACKWARD,
                 pay_accrued_on_default: bool = True,
                 protection_from_start_of_day: bool = True,
                 step_in_days: int = 1,
                 settle_days: int = 3):
        """
        Create a CDS contract.

        Args:
            accrual_start_dt: Start of accrual of the first coupon period
            maturity_dt_or_tenor: Maturity (protection end) date or tenor
                from the accrual start such as "5Y"
            running_coupon: Fixed coupon rate (decimal, 0.01 for 100bp)
            notional: Notional amount, positive
            protection_type: BUY or SELL protection
            currency: Currency of both legs
            legal_entity: Identifier of the reference entity
            freq_type: Coupon frequency
            dc_type: Accrual day count
            cal_type: Holiday calendar for payment dates
            bd_type: Business day adjustment of payment dates
            dg_type: Schedule generation rule
            pay_accrued_on_default: Pay accrued premium on default
            protection_from_start_of_day: Protection starts at the start of
                the day rather than the end
            step_in_days: Calendar days from valuation to step-in date
            settle_days: Business days from valuation to cash settlement
        """

        check_argument_types(self.__init__, locals())

        self.derivative_type = InstrumentTypes.CDS

        if isinstance(maturity_dt_or_tenor, Date):
            maturity_dt = maturity_dt_or_tenor
        else:
            maturity_dt = accrual_start_dt.add_tenor(maturity_dt_or_tenor)

        if accrual_start_dt >= maturity_dt:
            raise LibError("Accrual start date must be before maturity date")

        if notional <= 0.0:
            raise LibError("Notional must be positive and not "
                           + str(notional))

        if step_in_days < 0 or settle_days < 0:
            raise LibError("Step-in and settlement lags cannot be negative")

        self._accrual_start_dt = accrual_start_dt
        self._maturity_dt = maturity_dt
        self._running_coupon = running_coupon
        self._notional = notional
        self._protection_type = protection_type
        self._currency = currency
        self._legal_entity = legal_entity
        self._freq_type = freq_type
        self._dc_type = dc_type
        self._cal_type = cal_type
        self._bd_type = bd_type
        self._dg_type = dg_type
        self._pay_accrued_on_default = pay_accrued_on_default
        self._protection_from_start_of_day = protection_from_start_of_day
        self._step_in_days = step_in_days
        self._settle_days = settle_days

        self._periods = self._generate_periods()

###############################################################################

    def _generate_periods(self):
        """ Build the accrual periods from a schedule running back from the
        unadjusted maturity date. """

        schedule = Schedule(
            effective_dt=self._accrual_start_dt,
            termination_dt=self._maturity_dt,
            freq_type=self._freq_type,
            cal_type=self._cal_type,
            bd_type=self._bd_type,
            dg_type=self._dg_type,
            adjust_termination_dt=False
        )

        schedule_dts = schedule.schedule_dts()
        calendar = Calendar(self._cal_type)
        day_count = DayCount(self._dc_type)
        shift = 1 if self._protection_from_start_of_day else 0

        periods = []
        num_periods = len(schedule_dts) - 1

        for i in range(num_periods):

            start_dt = schedule_dts[i]

            if i < num_periods - 1:
                end_dt = schedule_dts[i + 1]
                payment_dt = end_dt
            else:
                # the last period accrues to the end of the maturity date
                end_dt = self._maturity_dt.add_days(shift)
                payment_dt = calendar.adjust(self._maturity_dt, self._bd_type)

            periods.append(CreditCouponPeriod(
                start_dt=start_dt,
                end_dt=end_dt,
                effective_start_dt=start_dt.add_days(-shift),
                effective_end_dt=end_dt.add_days(-shift),
                payment_dt=payment_dt,
                year_frac=day_count.year_frac(start_dt, end_dt)[0]))

        return tuple(periods)

###############################################################################

    def position(self,
                 model,
                 formula: AccrualOnDefaultFormulae = AccrualOnDefaultFormulae.ORIGINAL_ISDA,
                 price_type: PriceTypes = PriceTypes.CLEAN):
        """
        Create a Position object for this CDS.

        Args:
            model: CreditModel holding the curves and recovery rates
            formula: Accrual on default formula of the pricer
            price_type: CLEAN or DIRTY values

        Returns:
            Position object for computing values and risk measures
        """
        from isdacds.market.position.position import Position
        return Position(self, model, formula, price_type)

###############################################################################

    def periodic_payments(self):
        """ The ordered accrual periods of the premium leg. """
        return self._periods

    def step_in_dt(self, value_dt: Date):
        """ Date from which protection runs for a trade done at value_dt. """
        return value_dt.add_days(self._step_in_days)

    def settlement_dt(self, value_dt: Date):
        """ Cash settlement date for a trade done at value_dt. """
        calendar = Calendar(self._cal_type)
        return calendar.add_business_days(value_dt, self._settle_days)

    def effective_start_dt(self, step_in_dt: Date):
        """ Start of protection given the step-in date. """

        start_dt = step_in_dt if step_in_dt > self._accrual_start_dt \
            else self._accrual_start_dt

        if self._protection_from_start_of_day:
            return start_dt.add_days(-1)
        return start_dt

    def accrued_year_fraction(self, step_in_dt: Date):
        """ Year fraction of premium accrued from the start of the current
        period to the step-in date. A step-in date beyond the last period
        accrues from the start of the last period. """

        if step_in_dt < self.accrual_start_dt:
            return 0.0

        if step_in_dt == self.accrual_end_dt:
            return 0.0

        current = self._periods[-1]
        for period in self._periods:
            if period.contains(step_in_dt):
                current = period
                break

        return DayCount(self._dc_type).year_frac(current.start_dt,
                                                 step_in_dt)[0]

    def accrued_premium(self, value_dt: Date):
        """ Signed accrued premium at the step-in date of value_dt, paid by
        the protection buyer. """

        yf = self.accrued_year_fraction(self.step_in_dt(value_dt))
        return self.signed_notional * self._running_coupon * yf

###############################################################################

    @property
    def accrual_start_dt(self):
        return self._periods[0].start_dt

    @property
    def accrual_end_dt(self):
        return self._periods[-1].end_dt

    @property
    def protection_end_dt(self):
        return self._periods[-1].effective_end_dt

    @property
    def maturity_dt(self):
        return self._maturity_dt

    @property
    def running_coupon(self):
        return self._running_coupon

    @property
    def notional(self):
        return self._notional

    @property
    def signed_notional(self):
        return self._protection_type.normalize(self._notional)

    @property
    def protection_type(self):
        return self._protection_type

    @property
    def currency(self):
        return self._currency

    @property
    def legal_entity(self):
        return self._legal_entity

    @property
    def dc_type(self):
        return self._dc_type

    @property
    def pay_accrued_on_default(self):
        return self._pay_accrued_on_default

    @property
    def protection_from_start_of_day(self):
        return self._protection_from_start_of_day

###############################################################################

    def print_periods(self):
        """ Print the accrual periods of the premium leg. """

        header = ["NUM", "START", "END", "EFF START", "EFF END", "PAYMENT",
                  "YEAR FRAC", "COUPON"]

        rows = []
        for i, p in enumerate(self._periods):
            coupon = self._notional * self._running_coupon * p.year_frac
            rows.append([i + 1, str(p.start_dt), str(p.end_dt),
                         str(p.effective_start_dt), str(p.effective_end_dt),
                         str(p.payment_dt), p.year_frac, coupon])

        print(format_table(header, rows))

###############################################################################

    def __repr__(self):
        s = label_to_string("OBJECT TYPE", type(self).__name__)
        s += label_to_string("LEGAL ENTITY", self._legal_entity)
        s += label_to_string("ACCRUAL START DATE", self.accrual_start_dt)
        s += label_to_string("MATURITY DATE", self._maturity_dt)
        s += label_to_string("RUNNING COUPON", f"{self._running_coupon*10000:.2f}bp")
        s += label_to_string("NOTIONAL", self._notional)
        s += label_to_string("PROTECTION", self._protection_type)
        s += label_to_string("CURRENCY", self._currency)
        s += label_to_string("FREQUENCY", self._freq_type)
        s += label_to_string("DAY COUNT", self._dc_type)
        s += label_to_string("ACCRUED ON DEFAULT", self._pay_accrued_on_default)
        s += label_to_string("START OF DAY", self._protection_from_start_of_day, "")
        return s

###############################################################################
