"""Reference outputs and validation helpers for the MT19937 generator.

Both tables are for ``seed(1)`` and were produced by the reference
``mt19937ar.c``. ``DOUBLED_REFERENCE_SEED1`` holds the outputs at 0-based
stream positions ``2^k - 1`` for k = 0..32, which checks long-period
behaviour without storing every intermediate value (although reaching them
still means advancing through the whole stream).

Used by:
  - ``reference_test.py`` for the short and long reference runs.
  - ``scripts/demo.py`` for the console validation driver.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from . import batch
from .twister import MT19937

# First 200 outputs of next_u32() for seed 1.
EXPECTED_SEED1: tuple[int, ...] = (
    1791095845, 4282876139, 3093770124, 4005303368, 491263,
    550290313, 1298508491, 4290846341, 630311759, 1013994432,
    396591248, 1703301249, 799981516, 1666063943, 1484172013,
    2876537340, 1704103302, 4018109721, 2314200242, 3634877716,
    1800426750, 1345499493, 2942995346, 2252917204, 878115723,
    1904615676, 3771485674, 986026652, 117628829, 2295290254,
    2879636018, 3925436996, 1792310487, 1963679703, 2399554537,
    1849836273, 602957303, 4033523166, 850839392, 3343156310,
    3439171725, 3075069929, 4158651785, 3447817223, 1346146623,
    398576445, 2973502998, 2225448249, 3764062721, 3715233664,
    3842306364, 3561158865, 365262088, 3563119320, 167739021,
    1172740723, 729416111, 254447594, 3771593337, 2879896008,
    422396446, 2547196999, 1808643459, 2884732358, 4114104213,
    1768615473, 2289927481, 848474627, 2971589572, 1243949848,
    1355129329, 610401323, 2948499020, 3364310042, 3584689972,
    1771840848, 78547565, 146764659, 3221845289, 2680188370,
    4247126031, 2837408832, 3213347012, 1282027545, 1204497775,
    1916133090, 3389928919, 954017671, 443352346, 315096729,
    1923688040, 2015364118, 3902387977, 413056707, 1261063143,
    3879945342, 1235985687, 513207677, 558468452, 2253996187,
    83180453, 359158073, 2915576403, 3937889446, 908935816,
    3910346016, 1140514210, 1283895050, 2111290647, 2509932175,
    229190383, 2430573655, 2465816345, 2636844999, 630194419,
    4108289372, 2531048010, 1120896190, 3005439278, 992203680,
    439523032, 2291143831, 1778356919, 4079953217, 2982425969,
    2117674829, 1778886403, 2321861504, 214548472, 3287733501,
    2301657549, 194758406, 2850976308, 601149909, 2211431878,
    3403347458, 4057003596, 127995867, 2519234709, 3792995019,
    3880081671, 2322667597, 590449352, 1924060235, 598187340,
    3831694379, 3467719188, 1621712414, 1708008996, 2312516455,
    710190855, 2801602349, 3983619012, 1551604281, 1493642992,
    2452463100, 3224713426, 2739486816, 3118137613, 542518282,
    3793770775, 2964406140, 2678651729, 2782062471, 3225273209,
    1520156824, 1498506954, 3278061020, 1159331476, 1531292064,
    3847801996, 3233201345, 1838637662, 3785334332, 4143956457,
    50118808, 2849459538, 2139362163, 2670162785, 316934274,
    492830188, 3379930844, 4078025319, 275167074, 1932357898,
    1526046390, 2484164448, 4045158889, 1752934226, 1631242710,
    1018023110, 3276716738, 3879985479, 3313975271, 2463934640,
    1294333494, 12327951, 3318889349, 2650617233, 656828586,
)

# (index, value) pairs for indices 2^k - 1, k = 0..32, seed 1.
DOUBLED_REFERENCE_SEED1: tuple[tuple[int, int], ...] = (
    (0, 1791095845),
    (1, 4282876139),
    (3, 4005303368),
    (7, 4290846341),
    (15, 2876537340),
    (31, 3925436996),
    (63, 2884732358),
    (127, 2321861504),
    (255, 1195370327),
    (511, 899765072),
    (1023, 1714350790),
    (2047, 3742484479),
    (4095, 3962329154),
    (8191, 740139619),
    (16383, 3156554771),
    (32767, 2155441805),
    (65535, 181306153),
    (131071, 1493556421),
    (262143, 1963136003),
    (524287, 2991783559),
    (1048575, 1708194087),
    (2097151, 712866985),
    (4194303, 2195311408),
    (8388607, 2899694794),
    (16777215, 1460185617),
    (33554431, 1301553711),
    (67108863, 669321401),
    (134217727, 2613167558),
    (268435455, 2861867968),
    (536870911, 175437983),
    (1073741823, 382741236),
    (2147483647, 3139600069),
    (4294967295, 3468780828),
)


def doubled_indices(max_k: int = 32) -> list[int]:
    """Stream positions 2^k - 1 for k = 0..max_k."""
    return [(1 << k) - 1 for k in range(max_k + 1)]


def compare_outputs(
    rng: MT19937, expected: Sequence[int]
) -> tuple[bool, list[str]]:
    """Draw ``len(expected)`` values from ``rng`` and compare them.

    Returns (match: bool, diffs: list of error messages).
    """
    diffs = []
    for n, exp in enumerate(expected):
        got = rng.next_u32()
        if got != exp:
            diffs.append(f"n={n}: got {got}, expected {exp}")
    return len(diffs) == 0, diffs


def check_doubled_reference(
    seed: int = 1,
    max_k: int = 32,
    fast: bool = True,
    progress: Optional[Callable[[int, int], None]] = None,
) -> tuple[bool, list[str]]:
    """Check the outputs at positions 2^k - 1 against the seed-1 table.

    Every intermediate word is generated; only the target positions are
    tempered and compared. ``fast`` skips ahead with the numpy twist,
    otherwise the pure-Python ``MT19937.discard`` is used. ``progress`` is
    called with (index, value) after each target is drawn.

    Raises ValueError for seeds other than 1 or max_k outside [0, 32],
    since there is no reference table for them.
    """
    if seed != 1:
        raise ValueError(f"no doubled reference table for seed {seed}")
    if not 0 <= max_k < len(DOUBLED_REFERENCE_SEED1):
        raise ValueError(
            f"max_k must be in [0, {len(DOUBLED_REFERENCE_SEED1) - 1}]"
        )

    rng = MT19937(seed)
    skip = batch.discard if fast else MT19937.discard
    diffs = []
    consumed = 0
    for index, exp in DOUBLED_REFERENCE_SEED1[: max_k + 1]:
        skip(rng, index - consumed)
        got = rng.next_u32()
        consumed = index + 1
        if progress is not None:
            progress(index, got)
        if got != exp:
            diffs.append(f"n={index}: got {got}, expected {exp}")
    return len(diffs) == 0, diffs
