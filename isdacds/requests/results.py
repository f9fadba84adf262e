"""
Result classes for storing valuation and risk analytics.

Provides dataclasses for:
- Valuation: Monetary amounts with currency
- Delta: First-order sensitivities to the zero rates of one curve
- Risk: Container for the Delta ladders of several curves
- AnalyticsResult: Complete result set (PV, risk and credit measures)

All classes support arithmetic operations where appropriate and provide
formatted output for analysis.
"""

import numpy as np
import pandas as pd
from tabulate import tabulate

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from isdacds.utils.currency import CurrencyTypes


@dataclass(frozen=True)
class Valuation:
    """
    A monetary amount together with its currency.

    Supports arithmetic operations (+, -, *, /) when currencies match.
    Immutable dataclass suitable for use in aggregations.

    Attributes:
        amount (float): Monetary value
        currency (CurrencyTypes): Currency denomination

    Example:
        >>> v1 = Valuation(1000.0, CurrencyTypes.USD)
        >>> v2 = Valuation(500.0, CurrencyTypes.USD)
        >>> total = v1 + v2  # Valuation(1500.0, USD)
        >>> scaled = v1 * 1.1  # Valuation(1100.0, USD)
    """
    amount: float
    currency: CurrencyTypes = CurrencyTypes.NONE

    def __post_init__(self):
        if not isinstance(self.currency, CurrencyTypes):
            raise TypeError(
                f"currency must be a CurrencyTypes enum, got {type(self.currency)}"
            )

    def __repr__(self) -> str:
        return f"{self.amount:.2f} {self.currency.name}"

    def __add__(self, other: Any) -> "Valuation":
        # Allow adding two Valuations of same currency
        if not isinstance(other, Valuation):
            return NotImplemented
        if self.currency is not other.currency:
            raise ValueError(
                f"Cannot add {self.currency.name} to {other.currency.name}"
            )
        return Valuation(
            amount=self.amount + other.amount,
            currency=self.currency
        )

    def __sub__(self, other: Any) -> "Valuation":
        if not isinstance(other, Valuation):
            return NotImplemented
        if self.currency is not other.currency:
            raise ValueError(
                f"Cannot subtract {other.currency.name} from {self.currency.name}"
            )
        return Valuation(
            amount=self.amount - other.amount,
            currency=self.currency
        )

    def __mul__(self, factor: float) -> "Valuation":
        return Valuation(
            amount=self.amount * factor,
            currency=self.currency
        )

    def __rmul__(self, factor: float) -> "Valuation":
        return self.__mul__(factor)

    def __truediv__(self, divisor: float) -> "Valuation":
        return Valuation(
            amount=self.amount / divisor,
            currency=self.currency
        )

    def __radd__(self, other: Any) -> "Valuation":
        # support sum() with initial zero
        if other == 0:
            return self
        return self.__add__(other)


class Ladder:
    """
    Encapsulates a node->sensitivity mapping and provides a DataFrame view.

    Attributes:
        data (Dict[str, float]): Mapping of node label -> sensitivity value
        _curve_name (str): Curve identifier for labeling

    Example:
        >>> data = {"1.0000": 10.5, "5.0000": -8.2}
        >>> ladder = Ladder(data, "USD_DISC")
        >>> df = ladder.df  # Returns pandas DataFrame
    """
    def __init__(self, data: Dict[str, float], curve_name: str):
        self.data = data
        self._curve_name = curve_name

    @property
    def df(self) -> pd.DataFrame:
        """
        Return the risk ladder as a pandas DataFrame:
          - index: node labels
          - single column: "<CURVE>_Risk"
        """
        df = pd.DataFrame.from_dict(
            self.data,
            orient='index',
            columns=[f"{self._curve_name}_Risk"]
        )
        df.index.name = 'Node'
        return df

    def to_dict(self) -> Dict[str, float]:
        """Return the raw node->value mapping."""
        return dict(self.data)

    def __repr__(self):
        count = len(self.data)
        return f"Ladder(curve={self._curve_name}, points={count}, curve_data={self.data})"


@dataclass(frozen=True)
class Delta:
    """
    First-order sensitivity of a position to the node zero rates of a curve.

    Each entry is the change in value for a 1bp increase of one node zero
    rate, computed analytically by the pricer.

    Attributes:
        risk_ladder (np.ndarray): Sensitivities for each node (shape: [N])
        tenors (List[str]): Node labels (node times in years)
        currency (CurrencyTypes): Currency of the sensitivities
        curve_name (str): Name of the curve in the model

    Example:
        >>> delta = Delta(
        ...     risk_ladder=[10.2, -5.3],
        ...     tenors=["1.0000", "5.0000"],
        ...     currency=CurrencyTypes.USD,
        ...     curve_name="USD_DISC"
        ... )
        >>> total = delta.value.amount  # Sum of sensitivities
        >>> df = delta.ladder.df  # Export to DataFrame
    """
    risk_ladder: np.ndarray
    tenors:       List[str]
    currency:     CurrencyTypes
    curve_name:   str

    def __post_init__(self):
        arr = np.asarray(self.risk_ladder, dtype=float)
        object.__setattr__(self, 'risk_ladder', arr)
        n = len(self.risk_ladder)
        if n != len(self.tenors):
            raise ValueError(
                f"Expected {n} tenors, got {len(self.tenors)}"
            )
        if not isinstance(self.currency, CurrencyTypes):
            raise TypeError(
                f"currency must be CurrencyTypes, got {type(self.currency)}"
            )
        if not isinstance(self.curve_name, str):
            raise TypeError(
                f"curve_name must be str, got {type(self.curve_name)}"
            )

    @property
    def value(self) -> Valuation:
        """Sum of the ladder, the parallel shift sensitivity."""
        total = float(np.sum(self.risk_ladder))
        return Valuation(amount=total, currency=self.currency)

    @property
    def ladder(self) -> Ladder:
        """Return the node->sensitivity mapping as a Ladder object."""
        data = dict(zip(self.tenors, self.risk_ladder.tolist()))
        return Ladder(data, self.curve_name)

    @property
    def table(self) -> str:
        """The ladder formatted as a text table."""
        rows = [[t, v] for t, v in zip(self.tenors, self.risk_ladder.tolist())]
        rows.append(["TOTAL", self.value.amount])
        return tabulate(rows, headers=["Node", f"{self.curve_name} ({self.currency.name})"],
                        tablefmt="grid", floatfmt=".4f")

    def __repr__(self):
        total = self.value.amount
        cur = self.currency.name
        n = len(self.tenors)
        return (
            f"{self.__class__.__name__}("
            f"{self.curve_name}: {total:.6g} {cur}, "
            f"points={n})"
        )

    def __add__(self, other: Any) -> 'Delta':
        """
        Sum two Delta objects with the same curve, currency and nodes.
        Returns a new Delta with elementwise sum of risk_ladder.
        """
        if not isinstance(other, Delta):
            return NotImplemented
        if (self.curve_name != other.curve_name or
            self.currency  != other.currency or
            self.tenors    != other.tenors):
            raise ValueError(
                "Cannot add Delta with mismatched curve_name, currency, or tenors"
            )
        return Delta(
            risk_ladder=self.risk_ladder + other.risk_ladder,
            tenors=self.tenors,
            currency=self.currency,
            curve_name=self.curve_name
        )

    def __radd__(self, other: Any) -> 'Delta':
        if other == 0:
            return self
        return self.__add__(other)


class Risk:
    """
    Container for per-curve Delta ladders.

    Access patterns:
        1. Attribute: risk.USD_DISC.value
        2. Callable: risk("ACME_USD_SURV")

    Example:
        >>> risk = Risk([delta_disc, delta_surv])
        >>> risk.USD_DISC.ladder.df

    Raises:
        ValueError: If duplicate curve names provided
    """
    def __init__(self, ladders: Iterable[Delta]):
        self._by_curve = {}  # type: Dict[str, Delta]

        for ladder in ladders:
            name = ladder.curve_name
            if name in self._by_curve:
                raise ValueError(f"Duplicate curve {name}")
            self._by_curve[name] = ladder
            if name.isidentifier():
                setattr(self, name, ladder)

    def __call__(self, curve_name: str) -> Delta:
        try:
            return self._by_curve[curve_name]
        except KeyError:
            raise ValueError(f"No risk data for curve: {curve_name}")

    def __iter__(self):
        return iter(self._by_curve.values())

    def __len__(self):
        return len(self._by_curve)

    @property
    def curve_names(self) -> List[str]:
        return list(self._by_curve.keys())

    @property
    def df(self) -> pd.DataFrame:
        """All ladders stacked in one long DataFrame."""
        frames = []
        for name, delta in self._by_curve.items():
            frames.append(pd.DataFrame({"curve": name,
                                        "node": delta.tenors,
                                        "delta": delta.risk_ladder}))
        if len(frames) == 0:
            return pd.DataFrame(columns=["curve", "node", "delta"])
        return pd.concat(frames, ignore_index=True)

    def __repr__(self):
        parts = []
        for name, obj in self._by_curve.items():
            mv = obj.value
            parts.append(f"{name}={mv.amount:.6g} {mv.currency.name}")
        return f"{self.__class__.__name__}({', '.join(parts)})"


class AnalyticsResult:
    """
    Complete analytics result set of a CDS position.

    Central result container returned by position.compute() calls.

    Args:
        value (Optional[Valuation]): Present value with currency
        risk (Optional[Risk]): Delta ladders of the discount and survival curves
        par_spread (Optional[float]): Par spread (decimal)
        rpv01 (Optional[float]): Risky annuity times signed notional
        recovery01 (Optional[Valuation]): Value change per unit recovery rate

    Example:
        >>> pos = cds.position(model)
        >>> result = pos.compute([RequestTypes.VALUE, RequestTypes.DELTA])
        >>> print(result.value)  # 1234.56 USD
        >>> print(result.risk.USD_DISC)  # Delta ladder
    """
    def __init__(
        self,
        value: Optional[Valuation] = None,
        risk: Optional[Risk] = None,
        par_spread: Optional[float] = None,
        rpv01: Optional[float] = None,
        recovery01: Optional[Valuation] = None,
    ):
        # store inputs directly
        self._value = value
        self._risk = risk
        self._par_spread = par_spread
        self._rpv01 = rpv01
        self._recovery01 = recovery01

    @property
    def value(self) -> Optional[Valuation]:
        return self._value

    @property
    def risk(self) -> Optional[Risk]:
        """Return the Risk object (delta ladders)."""
        return self._risk

    @property
    def par_spread(self) -> Optional[float]:
        return self._par_spread

    @property
    def rpv01(self) -> Optional[float]:
        return self._rpv01

    @property
    def recovery01(self) -> Optional[Valuation]:
        return self._recovery01

    def __repr__(self):
        cls = self.__class__.__name__
        parts = []
        if self._value is not None:
            parts.append(f"value={self._value!r}")
        if self._risk is not None:
            parts.append(f"risk={self._risk!r}")
        if self._par_spread is not None:
            parts.append(f"par_spread={self._par_spread:.6f}")
        if self._rpv01 is not None:
            parts.append(f"rpv01={self._rpv01:.4f}")
        if self._recovery01 is not None:
            parts.append(f"recovery01={self._recovery01!r}")
        return f"{cls}({', '.join(parts)})"
