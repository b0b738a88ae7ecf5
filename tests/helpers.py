from app.models.data import Entry


def make_entry(name, score, time_used=None, date="2024-01-01", **extra):
    data = {"name": name, "score": score, "date": date, **extra}
    if time_used is not None:
        data["timeUsed"] = time_used
    return Entry(data)
