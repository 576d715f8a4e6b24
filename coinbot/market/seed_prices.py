"""Seed coins and per-coin parameters for the price simulator."""

# symbol -> (id, name, starting price in USD, circulating supply)
SEED_COINS: dict[str, tuple[str, str, float, float]] = {
    "BTC": ("bitcoin", "Bitcoin", 50000.00, 19_700_000),
    "ETH": ("ethereum", "Ethereum", 3000.00, 120_000_000),
    "SOL": ("solana", "Solana", 150.00, 450_000_000),
    "BNB": ("binancecoin", "BNB", 550.00, 150_000_000),
    "XRP": ("ripple", "XRP", 0.55, 55_000_000_000),
    "ADA": ("cardano", "Cardano", 0.45, 35_000_000_000),
    "DOGE": ("dogecoin", "Dogecoin", 0.15, 145_000_000_000),
    "LTC": ("litecoin", "Litecoin", 80.00, 75_000_000),
    "DOT": ("polkadot", "Polkadot", 7.00, 1_400_000_000),
    "LINK": ("chainlink", "Chainlink", 15.00, 590_000_000),
    "XMR": ("monero", "Monero", 160.00, 18_400_000),
    "USDT": ("tether", "Tether", 1.00, 110_000_000_000),
}

# Per-coin GBM parameters
# sigma: annualized volatility (crypto is much noisier than equities)
# mu: annualized drift / expected return
COIN_PARAMS: dict[str, dict[str, float]] = {
    "BTC": {"sigma": 0.60, "mu": 0.10},
    "ETH": {"sigma": 0.75, "mu": 0.10},
    "SOL": {"sigma": 1.00, "mu": 0.10},
    "BNB": {"sigma": 0.70, "mu": 0.08},
    "XRP": {"sigma": 0.90, "mu": 0.05},
    "ADA": {"sigma": 0.90, "mu": 0.05},
    "DOGE": {"sigma": 1.20, "mu": 0.05},  # Meme coin, very noisy
    "LTC": {"sigma": 0.80, "mu": 0.05},
    "DOT": {"sigma": 0.90, "mu": 0.05},
    "LINK": {"sigma": 0.90, "mu": 0.05},
    "XMR": {"sigma": 0.70, "mu": 0.05},
    "USDT": {"sigma": 0.01, "mu": 0.0},  # Stablecoin, pinned near $1
}

DEFAULT_PARAMS: dict[str, float] = {"sigma": 0.90, "mu": 0.05}

# Correlation groups for the simulator's Cholesky decomposition
CORRELATION_GROUPS: dict[str, set[str]] = {
    "majors": {"BTC", "ETH"},
    "alts": {"SOL", "BNB", "XRP", "ADA", "DOGE", "LTC", "DOT", "LINK", "XMR"},
}

STABLECOINS: set[str] = {"USDT"}

# Correlation coefficients
INTRA_MAJORS_CORR = 0.8  # BTC and ETH move together
INTRA_ALTS_CORR = 0.6  # Alts follow each other
CROSS_GROUP_CORR = 0.7  # Alts follow the majors
STABLE_CORR = 0.0  # Stablecoins don't follow anything
