"Create Position to value credit default swaps"

from isdacds.utils.global_types import AccrualOnDefaultFormulae, PriceTypes
from isdacds.market.position.engine import Engine


class Position:
    def __init__(self,
                 derivative,
                 model,
                 formula: AccrualOnDefaultFormulae = AccrualOnDefaultFormulae.ORIGINAL_ISDA,
                 price_type: PriceTypes = PriceTypes.CLEAN):

        self.derivative = derivative
        self.model = model

        self._engine = Engine(model, formula, price_type)

    def compute(self, request_list):
        return self._engine.compute(self.derivative, request_list)
