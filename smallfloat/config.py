from pathlib import Path

import yaml

_CFG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def load_config(path=None):
    with open(path or _CFG_PATH, "r") as f:
        return yaml.safe_load(f) or {}

# --- helpers that fill in defaults so a short config.yaml still works --------


def _as_list(x):
    """Ensure a config value is always a list."""
    if x is None:
        return []
    return list(x) if isinstance(x, (list, tuple)) else [x]


def _sweep_cfg(c, default_mode):
    return {
        "mode": str(c.get("mode", default_mode)),
        "samples": int(c.get("samples", 0)),
        "partitions": int(c.get("partitions", 1)),
        "workers": int(c.get("workers", 1)),
    }


def get_roundtrip_cfg(cfg):
    r = cfg.get("roundtrip", {}) or {}
    out = {
        "formats": [str(f) for f in _as_list(r.get("formats", ["f16", "e5m2", "e4m3"]))],
        "checks": [str(c) for c in _as_list(r.get("checks", ["roundtrip", "decode_sign", "decode_exact"]))],
    }
    out.update(_sweep_cfg(r, "exhaustive"))
    return out


def get_chain_cfg(cfg):
    c = cfg.get("chain", {}) or {}
    out = {
        "formats": [str(f) for f in _as_list(c.get("formats", ["e4m3", "e5m2"]))],
        "checks": [str(x) for x in _as_list(c.get("checks", ["chain", "encode_sign"]))],
    }
    # the full 2^32 domain takes hours in pure Python, so sample by default
    out.update(_sweep_cfg(c, "sampled"))
    out["samples"] = int(c.get("samples", 100000))
    return out


def get_oracle_cfg(cfg):
    o = cfg.get("oracle", {}) or {}
    out = {
        "formats": [str(f) for f in _as_list(o.get("formats", ["e4m3", "e5m2"]))],
        "checks": ["oracle"],
        "precision_bits": int(o.get("precision_bits", 200)),
    }
    out.update(_sweep_cfg(o, "exhaustive"))
    return out
