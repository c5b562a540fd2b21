"""Reading DIMACS CNF, checking solutions and handling options for SAT solver tooling."""

__version__ = "0.1.0"
__all__ = [
    "cnf_reader",
    "cnf_stats",
    "dimacs_loader",
    "dimacs_parser",
    "lingeling_io",
    "options",
    "parse_utils",
    "system",
]