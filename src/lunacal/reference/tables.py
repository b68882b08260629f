"""
Periodic-term tables for the solar and lunar series.

Rows are plain tuples; the tables are module constants and are never mutated.
Values follow Meeus, *Astronomical Algorithms*, as tabulated by Reingold &
Dershowitz, *Calendrical Calculations* (tables 14.1, 14.3, 14.4, 14.5).
"""

# Solar longitude: (amplitude, phase_deg, rate_deg_per_century)
#   Δλ = 5.729577951308232e-6 * Σ amplitude * sin(phase + rate * c)
SOLAR_LONGITUDE_TERMS = (
    (403406, 270.54861, 0.9287892),
    (195207, 340.19128, 35999.1376958),
    (119433, 63.91854, 35999.4089666),
    (112392, 331.2622, 35998.7287385),
    (3891, 317.843, 71998.20261),
    (2819, 86.631, 71998.4403),
    (1721, 240.052, 36000.35726),
    (660, 310.26, 71997.4812),
    (350, 247.23, 32964.4678),
    (334, 260.87, -19.441),
    (314, 297.82, 445267.1117),
    (268, 343.14, 45036.884),
    (242, 166.79, 3.1008),
    (234, 81.53, 22518.4434),
    (158, 3.5, -19.9739),
    (132, 132.75, 65928.9345),
    (129, 182.95, 9038.0293),
    (114, 162.03, 3034.7684),
    (99, 29.8, 33718.148),
    (93, 266.4, 3034.448),
    (86, 249.2, -2280.773),
    (78, 157.6, 29929.992),
    (72, 257.8, 31556.493),
    (68, 185.1, 149.588),
    (64, 69.9, 9037.75),
    (46, 8.0, 107997.405),
    (38, 197.1, -4444.176),
    (37, 250.4, 151.771),
    (32, 65.3, 67555.316),
    (29, 162.7, 31556.08),
    (28, 341.5, -4561.54),
    (27, 291.6, 107996.706),
    (27, 98.5, 1221.655),
    (25, 146.7, 62894.167),
    (24, 110.0, 31437.369),
    (21, 5.2, 14578.298),
    (21, 342.6, -31931.757),
    (20, 230.9, 34777.243),
    (18, 256.1, 1221.999),
    (17, 45.3, 62894.511),
    (14, 242.9, -4442.039),
    (13, 115.2, 107997.909),
    (13, 151.8, 119.066),
    (13, 285.3, 16859.071),
    (12, 53.3, -4.578),
    (10, 126.6, 26895.292),
    (10, 205.7, -39.127),
    (10, 85.9, 12297.536),
    (10, 146.1, 90073.778),
)

# Lunar longitude: (d, m, m', f, coefficient in microdegrees)
# Terms with m != 0 are scaled by E^|m|.
LUNAR_LONGITUDE_TERMS = (
    (0, 0, 1, 0, 6288774),
    (2, 0, -1, 0, 1274027),
    (2, 0, 0, 0, 658314),
    (0, 0, 2, 0, 213618),
    (0, 1, 0, 0, -185116),
    (0, 0, 0, 2, -114332),
    (2, 0, -2, 0, 58793),
    (2, -1, -1, 0, 57066),
    (2, 0, 1, 0, 53322),
    (2, -1, 0, 0, 45758),
    (0, 1, -1, 0, -40923),
    (1, 0, 0, 0, -34720),
    (0, 1, 1, 0, -30383),
    (2, 0, 0, -2, 15327),
    (0, 0, 1, 2, -12528),
    (0, 0, 1, -2, 10980),
    (4, 0, -1, 0, 10675),
    (0, 0, 3, 0, 10034),
    (4, 0, -2, 0, 8548),
    (2, 1, -1, 0, -7888),
    (2, 1, 0, 0, -6766),
    (1, 0, -1, 0, -5163),
    (1, 1, 0, 0, 4987),
    (2, -1, 1, 0, 4036),
    (2, 0, 2, 0, 3994),
    (4, 0, 0, 0, 3861),
    (2, 0, -3, 0, 3665),
    (0, 1, -2, 0, -2689),
    (2, 0, -1, 2, -2602),
    (2, -1, -2, 0, 2390),
    (1, 0, 1, 0, -2348),
    (2, -2, 0, 0, 2236),
    (0, 1, 2, 0, -2120),
    (0, 2, 0, 0, -2069),
    (2, -2, -1, 0, 2048),
    (2, 0, 1, -2, -1773),
    (2, 0, 0, 2, -1595),
    (4, -1, -1, 0, 1215),
    (0, 0, 2, 2, -1110),
    (3, 0, -1, 0, -892),
    (2, 1, 1, 0, -810),
    (4, -1, -2, 0, 759),
    (0, 2, -1, 0, -713),
    (2, 2, -1, 0, -700),
    (2, 1, -2, 0, 691),
    (2, -1, 0, -2, 596),
    (4, 0, 1, 0, 549),
    (0, 0, 4, 0, 537),
    (4, -1, 0, 0, 520),
    (1, 0, -2, 0, -487),
    (2, 1, 0, -2, -399),
    (0, 0, 2, -2, -381),
    (1, 1, 1, 0, 351),
    (3, 0, -2, 0, -340),
    (4, 0, -3, 0, 330),
    (2, -1, 2, 0, 327),
    (0, 2, 1, 0, -323),
    (1, 1, -1, 0, 299),
    (2, 0, 3, 0, 294),
)

# True new moon corrections: (m, m', f, power of E, amplitude in days)
# argument = m*M + m'*M' + f*F with the mean-phase arguments of lunation k.
NEW_MOON_CORRECTION_TERMS = (
    (0, 1, 0, 0, -0.4072),
    (1, 0, 0, 1, 0.17241),
    (0, 2, 0, 0, 0.01608),
    (0, 0, 2, 0, 0.01039),
    (-1, 1, 0, 1, 0.00739),
    (1, 1, 0, 1, -0.00514),
    (2, 0, 0, 2, 0.00208),
    (0, 1, -2, 0, -0.00111),
    (0, 1, 2, 0, -0.00057),
    (1, 2, 0, 1, 0.00056),
    (0, 3, 0, 0, -0.00042),
    (1, 0, 2, 1, 0.00042),
    (1, 0, -2, 1, 0.00038),
    (-1, 2, 0, 1, -0.00024),
    (2, 1, 0, 0, -0.00007),
    (0, 2, -2, 0, 0.00004),
    (3, 0, 0, 0, 0.00004),
    (1, 1, -2, 0, 0.00003),
    (0, 2, 2, 0, 0.00003),
    (1, 1, 2, 0, -0.00003),
    (-1, 1, 2, 0, 0.00003),
    (-1, 1, -2, 0, -0.00002),
    (1, 3, 0, 0, -0.00002),
    (0, 4, 0, 0, 0.00002),
)

# Planetary arguments for new moons: (phase_deg, rate_deg_per_lunation, amplitude in days)
NEW_MOON_ADDITIONAL_TERMS = (
    (251.88, 0.016321, 0.000165),
    (251.83, 26.651886, 0.000164),
    (349.42, 36.412478, 0.000126),
    (84.66, 18.206239, 0.00011),
    (141.74, 53.303771, 0.000062),
    (207.14, 2.453732, 0.00006),
    (154.84, 7.30686, 0.000056),
    (34.52, 27.261239, 0.000047),
    (207.19, 0.121824, 0.000042),
    (291.34, 1.844379, 0.00004),
    (161.72, 24.198154, 0.000037),
    (239.56, 25.513099, 0.000035),
    (331.55, 3.592518, 0.000023),
)
