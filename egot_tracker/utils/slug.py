from __future__ import annotations


def slugify(name: str) -> str:
    """
    "J.K. Simmons" -> "jk-simmons". Only ASCII letters survive; spaces and
    hyphens become "-", everything else (digits, punctuation, diacritics)
    is dropped, so "Zoe Saldaña" -> "zoe-saldaa".
    """
    out = []
    for ch in name:
        if "a" <= ch <= "z":
            out.append(ch)
        elif "A" <= ch <= "Z":
            out.append(ch.lower())
        elif ch in (" ", "-"):
            out.append("-")
    return "".join(out)
