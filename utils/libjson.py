import json
from typing import Any, Union

import numpy as np
from django.core.serializers.json import DjangoJSONEncoder


class PriceJSONEncoder(DjangoJSONEncoder):
    """DjangoJSONEncoder that also understands numpy scalars and arrays coming out of pandas frames"""

    def default(self, o):
        if isinstance(o, np.integer):
            return int(o)
        if isinstance(o, np.floating):
            return float(o)
        if isinstance(o, np.bool_):
            return bool(o)
        if isinstance(o, np.ndarray):
            return o.tolist()
        return super().default(o)


def dumps(data: Any) -> str:
    return json.dumps(data, cls=PriceJSONEncoder)


def loads(data: Union[str, bytes]) -> Any:
    return json.loads(data)
