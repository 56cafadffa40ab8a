import json
from pathlib import Path


def get_name():
    return "SMA"


def get_short_description():
    return "Simple moving average of a JSON series"


def get_description():
    return "Reads a JSON list of numbers, computes the simple moving average and writes the series next to it."


def get_version():
    return "1.0.0"


def get_parameters():
    return [
        {"label": "Values file", "identifier": "source_path", "kind": ["string"], "required": True},
        {"label": "Period", "identifier": "period", "kind": ["integer"], "required": True},
    ]


def process(handle, parameters):
    source = Path(parameters["source_path"])
    values = json.loads(source.read_text(encoding="utf-8"))
    period = parameters["period"]
    if period <= 0:
        raise ValueError("period must be > 0")
    if len(values) < period:
        raise ValueError(f"not enough values: needed {period}, got {len(values)}")

    series = []
    window_sum = sum(values[:period])
    series.append(window_sum / period)
    for i in range(period, len(values)):
        window_sum += values[i] - values[i - period]
        series.append(window_sum / period)
    handle.report_progress(50)

    destination = source.with_suffix(".sma.json")
    destination.write_text(json.dumps({"period": period, "sma": series[-1], "series": series}), encoding="utf-8")
    handle.report_progress(100)
    return [str(destination)]
