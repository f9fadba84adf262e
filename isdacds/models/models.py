"""
Credit market model holding the curves and recovery rates of the ISDA model.

Provides the CreditModel class for:
- Building ISDA discount curves per currency from zero rates
- Building survival curves per legal entity from zero or hazard rates
- Storing the recovery rate of each legal entity
- Creating scenario models with parallel or node-specific shocks
- Curve accessor for convenient attribute-style access

The model is the rates provider of the IsdaCdsPricer: a CDS looks up its
discount curve by currency and its survival curve and recovery rate by
legal entity.
"""

import logging
from typing import Dict, List, Union
from dataclasses import dataclass, field

from isdacds.utils.date import Date
from isdacds.utils.day_count import DayCount, DayCountTypes
from isdacds.utils.currency import CurrencyTypes
from isdacds.utils.error import LibError
from isdacds.market.curves.isda_curve import IsdaDiscountCurve, IsdaSurvivalCurve
from isdacds.market.curves.recovery_rates import ConstantRecoveryRate

logger = logging.getLogger(__name__)


class CurveAccessor:
    """
    Provides attribute-style access to curves in a CreditModel.

    Allows accessing curves via dot notation (model.curves.USD_DISC)
    instead of dictionary notation (model._curves_dict['USD_DISC']).

    Args:
        curves (Dict[str, object]): Dictionary of curve name -> curve

    Example:
        >>> model = CreditModel(value_dt)
        >>> model.build_discount_curve(CurrencyTypes.USD, ["1Y", "5Y"], [0.02, 0.03])
        >>> curve = model.curves.USD_DISC  # Attribute access
        >>> curve = model.curves["USD_DISC"]  # Dict access also works
    """
    def __init__(self, curves: Dict[str, object]):
        self._curves = curves

    def __getattr__(self, item):
        try:
            return self._curves[item]
        except KeyError:
            raise AttributeError(f"No such curve: {item}")

    def __getitem__(self, item):
        return self._curves[item]

    def __contains__(self, item):
        return item in self._curves

    def names(self) -> List[str]:
        return list(self._curves.keys())


def discount_curve_name(currency: CurrencyTypes) -> str:
    return f"{currency.name}_DISC"


def survival_curve_name(legal_entity: str, currency: CurrencyTypes) -> str:
    return f"{legal_entity}_{currency.name}_SURV"


@dataclass
class CreditModel:
    """
    Market container for CDS valuation with the ISDA standard model.

    Attributes:
        value_dt (Date): Valuation date for all curves
        _curves_dict (Dict[str, object]): Curves by name
        _discount_dict (Dict[CurrencyTypes, str]): Discount curve name by currency
        _survival_dict (Dict[tuple, str]): Survival curve name by (entity, currency)
        _recovery_dict (Dict[str, ConstantRecoveryRate]): Recovery by entity

    Example:
        >>> model = CreditModel(Date(15, 5, 2024))
        >>> model.build_discount_curve(CurrencyTypes.USD,
        ...                            ["6M", "1Y", "5Y", "10Y"],
        ...                            [0.050, 0.048, 0.042, 0.041])
        >>> model.build_survival_curve("ACME", CurrencyTypes.USD,
        ...                            ["1Y", "3Y", "5Y"],
        ...                            [0.010, 0.012, 0.015])
        >>> model.set_recovery_rate("ACME", 0.40)
        >>> result = cds.position(model).compute([RequestTypes.VALUE])
    """
    value_dt: Date
    _curves_dict: Dict[str, object] = field(default_factory=dict)
    _discount_dict: Dict[CurrencyTypes, str] = field(default_factory=dict)
    _survival_dict: Dict[tuple, str] = field(default_factory=dict)
    _recovery_dict: Dict[str, object] = field(default_factory=dict)

    def _node_dates(self, tenors_or_dts: List[Union[str, Date]]):
        dts = []
        for x in tenors_or_dts:
            if isinstance(x, Date):
                dts.append(x)
            elif isinstance(x, str):
                dts.append(self.value_dt.add_tenor(x))
            else:
                raise LibError(f"Curve node must be a tenor or a Date, got {type(x)}")
        return dts

    def build_discount_curve(
        self,
        currency: CurrencyTypes,
        tenors_or_dts: List[Union[str, Date]],
        zero_rates: List[float],
        dc_type: DayCountTypes = DayCountTypes.ACT_365F,
        name: str = None,
    ):
        """
        Construct the ISDA discount curve of a currency from zero rates.

        Args:
            currency (CurrencyTypes): Currency of the curve
            tenors_or_dts (List[str | Date]): Node tenors (e.g., "6M") or dates
            zero_rates (List[float]): Continuously compounded zero rates (decimal)
            dc_type (DayCountTypes): Curve day count (default: ACT_365F)
            name (str): Curve name (default: "<CCY>_DISC")

        Returns:
            IsdaDiscountCurve: The curve, also stored in the model
        """
        dts = self._node_dates(tenors_or_dts)
        curve = IsdaDiscountCurve.from_dates(
            self.value_dt, dts, zero_rates, dc_type,
            name or discount_curve_name(currency))
        self.add_discount_curve(currency, curve)
        return curve

    def build_survival_curve(
        self,
        legal_entity: str,
        currency: CurrencyTypes,
        tenors_or_dts: List[Union[str, Date]],
        zero_rates: List[float],
        dc_type: DayCountTypes = DayCountTypes.ACT_365F,
        name: str = None,
    ):
        """
        Construct the survival curve of a legal entity from zero hazard
        rates, the average hazard rate to each node.

        Args:
            legal_entity (str): Reference entity identifier
            currency (CurrencyTypes): Currency the curve applies to
            tenors_or_dts (List[str | Date]): Node tenors or dates
            zero_rates (List[float]): Zero hazard rates (decimal)
            dc_type (DayCountTypes): Curve day count (default: ACT_365F)
            name (str): Curve name (default: "<ENTITY>_<CCY>_SURV")

        Returns:
            IsdaSurvivalCurve: The curve, also stored in the model
        """
        dts = self._node_dates(tenors_or_dts)
        curve = IsdaSurvivalCurve.from_dates(
            self.value_dt, dts, zero_rates, dc_type,
            name or survival_curve_name(legal_entity, currency))
        self.add_survival_curve(legal_entity, currency, curve)
        return curve

    def build_survival_curve_from_hazard_rates(
        self,
        legal_entity: str,
        currency: CurrencyTypes,
        tenors_or_dts: List[Union[str, Date]],
        hazard_rates: List[float],
        dc_type: DayCountTypes = DayCountTypes.ACT_365F,
        name: str = None,
    ):
        """
        Construct a survival curve from hazard rates constant between nodes.

        Example:
            >>> model.build_survival_curve_from_hazard_rates(
            ...     "ACME", CurrencyTypes.USD, ["1Y", "5Y"], [0.01, 0.02])
        """
        dts = self._node_dates(tenors_or_dts)
        curve = IsdaSurvivalCurve.from_hazard_rates(
            self.value_dt,
            [self._time(dt, dc_type) for dt in dts],
            hazard_rates, dc_type,
            name or survival_curve_name(legal_entity, currency))
        self.add_survival_curve(legal_entity, currency, curve)
        return curve

    def _time(self, dt: Date, dc_type: DayCountTypes) -> float:
        return DayCount(dc_type).year_frac(self.value_dt, dt)[0]

    def set_recovery_rate(self, legal_entity: str, recovery_rate: float):
        """Set a constant recovery rate for a legal entity."""
        recovery = ConstantRecoveryRate(self.value_dt, recovery_rate, legal_entity)
        self.add_recovery_rate(legal_entity, recovery)
        return recovery

    def add_discount_curve(self, currency: CurrencyTypes, curve):
        """Store a discount curve for a currency."""
        name = getattr(curve, "name", None) or discount_curve_name(currency)
        self._curves_dict[name] = curve
        self._discount_dict[currency] = name

    def add_survival_curve(self, legal_entity: str, currency: CurrencyTypes, curve):
        """Store a survival curve for a legal entity and currency."""
        name = getattr(curve, "name", None) or survival_curve_name(legal_entity, currency)
        self._curves_dict[name] = curve
        self._survival_dict[(legal_entity, currency)] = name

    def add_recovery_rate(self, legal_entity: str, recovery_rates):
        """Store the recovery rates of a legal entity."""
        self._recovery_dict[legal_entity] = recovery_rates

    def discount_curve(self, currency: CurrencyTypes):
        if currency not in self._discount_dict:
            raise LibError(f"No discount curve for currency {currency.name}")
        return self._curves_dict[self._discount_dict[currency]]

    def survival_curve(self, legal_entity: str, currency: CurrencyTypes):
        key = (legal_entity, currency)
        if key not in self._survival_dict:
            raise LibError(f"No survival curve for {legal_entity} in {currency.name}")
        return self._curves_dict[self._survival_dict[key]]

    def recovery_rates(self, legal_entity: str):
        if legal_entity not in self._recovery_dict:
            raise LibError(f"No recovery rate for {legal_entity}")
        return self._recovery_dict[legal_entity]

    def scenario(self, curve_name: str, shock: Union[dict, float], node_index: int = None):
        """
        Create a new model with a shocked curve for scenario analysis.

        Args:
            curve_name (str): Name of curve to shock
            shock (dict | float): Shock in bps:
                - float: Parallel shock, or a shock to node_index only
                - dict: Node specific shocks (e.g., {0: 10.0, 3: -5.0})
            node_index (int | None): Node to shock when shock is a float

        Returns:
            CreditModel: New model with the shocked curve

        Raises:
            ValueError: If curve_name is not in the model

        Example:
            >>> # Parallel 10bp shock
            >>> shocked_model = model.scenario("USD_DISC", 10.0)

            >>> # Shock the third node only
            >>> shocked_model = model.scenario("ACME_USD_SURV", 1.0, node_index=2)
        """
        if curve_name not in self._curves_dict:
            raise ValueError(f"No curve found with name '{curve_name}'")

        curve = self._curves_dict[curve_name]

        if isinstance(shock, dict):
            shocked = curve
            for i, bps in shock.items():
                shocked = shocked.with_bumped_node(i, bps / 10000.0)
        elif node_index is not None:
            shocked = curve.with_bumped_node(node_index, shock / 10000.0)
        else:
            shocked = curve.with_parallel_shift(shock / 10000.0)

        logger.debug("Scenario on %s: shock %s node %s", curve_name, shock, node_index)

        new_model = CreditModel(
            value_dt=self.value_dt,
            _curves_dict=dict(self._curves_dict),
            _discount_dict=dict(self._discount_dict),
            _survival_dict=dict(self._survival_dict),
            _recovery_dict=dict(self._recovery_dict),
        )
        new_model._curves_dict[curve_name] = shocked

        return new_model

    @property
    def curves(self):
        """
        Access curves via attribute or dictionary notation.

        Returns:
            CurveAccessor: Accessor providing dot and bracket notation access

        Example:
            >>> curve1 = model.curves.USD_DISC  # Dot notation
            >>> curve2 = model.curves["USD_DISC"]  # Bracket notation
        """
        return CurveAccessor(self._curves_dict)
