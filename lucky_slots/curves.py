def ease_in(t: float, exponent: float = 3.0) -> float:
    t = max(0.0, min(1.0, t))
    return t**exponent
