"""
Analysis Method Profiles

Static display and educational text for every analysis method.
"""

from chartsense.schemas.analysis import AnalysisMethod, MethodCategory, MethodProfile


METHOD_PROFILES: dict[AnalysisMethod, MethodProfile] = {
    AnalysisMethod.CANDLESTICK: MethodProfile(
        id=AnalysisMethod.CANDLESTICK,
        name="Japanese Candlestick",
        description="Pattern detection for reversals",
        category=MethodCategory.CHART,
        psychology=(
            "Candlestick patterns reflect the emotional battle between buyers "
            "and sellers within each trading period."
        ),
        use_case="Best for short-term trading, swing trading, and identifying reversals.",
    ),
    AnalysisMethod.BAR: MethodProfile(
        id=AnalysisMethod.BAR,
        name="OHLC Bar Charts",
        description="Classic bar analysis",
        category=MethodCategory.CHART,
        psychology=(
            "Bar size shows trading range volatility; closing position shows "
            "buyer/seller dominance."
        ),
        use_case="Alternative to candlesticks for clarity in historical data analysis.",
    ),
    AnalysisMethod.POINT_FIGURE: MethodProfile(
        id=AnalysisMethod.POINT_FIGURE,
        name="Point & Figure",
        description="Price-focused X/O charts",
        category=MethodCategory.CHART,
        psychology="Filters out time noise to show pure supply and demand dynamics.",
        use_case="Identifying support/resistance levels, long-term trend spotting.",
    ),
    AnalysisMethod.HEIKIN_ASHI: MethodProfile(
        id=AnalysisMethod.HEIKIN_ASHI,
        name="Heikin-Ashi",
        description="Smoothed trend identification",
        category=MethodCategory.CHART,
        psychology=(
            "Shows momentum clearly by averaging prices, reduces emotional "
            "reaction to short-term reversals."
        ),
        use_case="Identifying trend direction, trend strength, and optimal exit/entry points.",
    ),
    AnalysisMethod.RENKO: MethodProfile(
        id=AnalysisMethod.RENKO,
        name="Renko Charts",
        description="Brick-based trend following",
        category=MethodCategory.CHART,
        psychology=(
            "Simplifies market direction by removing time element, showing "
            "only significant price moves."
        ),
        use_case="Trend-following strategies, breakout detection with minimal noise.",
    ),
    AnalysisMethod.KAGI: MethodProfile(
        id=AnalysisMethod.KAGI,
        name="Kagi Charts",
        description="Supply/demand visualization",
        category=MethodCategory.CHART,
        psychology=(
            "Line thickness changes highlight shifts in supply/demand dominance "
            "and trend reversals."
        ),
        use_case="Market strength analysis, identifying trend reversals and support/resistance.",
    ),
    AnalysisMethod.PATTERNS: MethodProfile(
        id=AnalysisMethod.PATTERNS,
        name="Classic Patterns",
        description="H&S, Triangles, Double Tops",
        category=MethodCategory.PATTERN,
        psychology=(
            "Chart patterns reflect market phases: accumulation, distribution, "
            "and breakout psychology."
        ),
        use_case="Mid-to-long-term technical analysis, confirming market sentiment.",
    ),
    AnalysisMethod.MOVING_AVERAGE: MethodProfile(
        id=AnalysisMethod.MOVING_AVERAGE,
        name="Moving Averages",
        description="SMA/EMA crossovers",
        category=MethodCategory.INDICATOR,
        psychology=(
            "Moving averages smooth price data to reveal trend momentum and "
            "potential exhaustion points."
        ),
        use_case="Trend confirmation, entry/exit timing, swing trading strategies.",
    ),
    AnalysisMethod.OSCILLATOR: MethodProfile(
        id=AnalysisMethod.OSCILLATOR,
        name="Oscillators",
        description="RSI, MACD, Stochastic",
        category=MethodCategory.INDICATOR,
        psychology="Oscillators show extremes in buying/selling pressure and potential reversal zones.",
        use_case="Short-term reversal spotting, trade timing, divergence analysis.",
    ),
    AnalysisMethod.FIBONACCI: MethodProfile(
        id=AnalysisMethod.FIBONACCI,
        name="Fibonacci & Pivots",
        description="Key S/R levels",
        category=MethodCategory.INDICATOR,
        psychology=(
            "Traders collectively react to Fibonacci levels, creating "
            "self-fulfilling support/resistance zones."
        ),
        use_case="Predicting pullback levels, setting target prices and stop-losses.",
    ),
    AnalysisMethod.VOLUME: MethodProfile(
        id=AnalysisMethod.VOLUME,
        name="Volume Analysis",
        description="OBV, VPT",
        category=MethodCategory.INDICATOR,
        psychology="Volume reflects participation and conviction behind price movements.",
        use_case="Confirming trend strength, spotting divergences, validating breakouts.",
    ),
}
