"""Workout library for the 32-week plan.

Static session templates keyed by variant name, plus the per-week variant
rotations. Everything here is read-only data consumed by
:class:`triplan.plan.source.TriathlonPlan`.
"""

from datetime import date
from typing import Any, Dict, List, Tuple

PLAN_START_DATE = date(2026, 1, 26)
TOTAL_WEEKS = 32

DAY_NAMES: Tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

# Race name by plan week; the race date is the race-day session date
RACES: Dict[int, str] = {
    9: "Half Marathon",
    19: "Olympic Tri",
    32: "70.3 Zell am See",
}

ATHLETE_BASELINE: Dict[str, Any] = {
    "ftp": 212,
    "max_hr": 192,
    "css": "2:05/100m",
    "foot_numbness_onset_km": 4,
}


# ============================================================================
# Phases
# ============================================================================

PHASE_FOCUS_DESCRIPTIONS: Dict[str, str] = {
    "aerobic_base": "Establish fitness foundation, technique focus, easy volume",
    "run_volume_and_threshold": "Build running volume, introduce threshold work",
    "race_execution": "Peak, taper, and race execution",
    "triathlon_base": "Swim technique, bike endurance, run base maintenance",
    "olympic_specificity": "Brick workouts, race-pace efforts, specificity",
    "recover_and_consolidate": "Active recovery, consolidation of gains",
    "long_course_base": "Aerobic base for 70.3, progressive volume",
    "70_3_specificity": "Long bricks, race-pace specificity, nutrition practice",
    "70_3_taper": "Peak fitness consolidation, race prep",
}

WEEK_NOTES: Dict[int, str] = {
    1: "Week 1: Baseline testing week. FTP test Tuesday, CSS test Thursday, 5K TT Friday.",
    4: "Week 4: Recovery week. Reduce volume by 20-30%, focus on technique and recovery.",
    9: "Week 9: Half Marathon race! Target sub-2:00. Treat as supported long run.",
    13: "Week 13: Recovery week. Consolidation phase after Olympic build.",
    19: "Week 19: Olympic Triathlon Race Day! Execute your race plan.",
    21: "Week 21: Active recovery. Easy swims, short rides, walk-based runs.",
    25: "Week 25: Mid-season recovery. Consolidation before 70.3 peak.",
    29: "Week 29: Peak training week. Highest volume before taper.",
    30: "Week 30: Week 1 of 70.3 taper. Reduce volume 30%.",
    31: "Week 31: Week 2 of taper. Reduce volume another 30%.",
    32: "Week 32: RACE WEEK - 70.3 Zell am See!",
}

# Long run distance (km) per week
LONG_RUN_PROGRESSION: Dict[int, float] = {
    1: 10, 2: 11, 3: 12, 4: 10, 5: 12, 6: 13, 7: 14, 8: 10, 9: 21.1,
    10: 12, 11: 13, 12: 14, 13: 10, 14: 14, 15: 15, 16: 16, 17: 12, 18: 10, 19: 10,
    20: 8, 21: 8,
    22: 12, 23: 14, 24: 16, 25: 12, 26: 14, 27: 16, 28: 18, 29: 14, 30: 10, 31: 8, 32: 21.1,
}
DEFAULT_LONG_RUN_KM = 10


# ============================================================================
# Variant rotations
# ============================================================================

BIKE_VARIANTS: List[str] = [
    "ftp_test", "sweet_spot", "threshold_intervals", "endurance", "tempo",
    "vo2max", "climbing_repeats", "endurance", "race_pace", "sweet_spot_2x20",
    "threshold_3x15", "recovery_ride", "tempo_climbing", "ftp_boost", "threshold_4x12",
    "race_simulation", "base_spin", "sweet_spot", "long_endurance", "recovery_ride",
    "tempo", "threshold_3x20", "climbing_specific", "long_endurance", "short_intensity",
    "openers",
]

RUN_VARIANTS: List[str] = [
    "baseline_5k_tt", "mile_repeats_4x", "tempo_20min", "recovery_run", "fartlek_8x",
    "mile_repeats_5x", "tempo_progression", "short_intervals", "race_pace_10k", "threshold_pyramid",
    "hills_8x", "recovery_shorts", "tempo_25min", "mile_repeats_6x", "race_pace_8k",
    "sharpening", "base_aerobic", "tempo_30min", "long_intervals", "recovery",
    "mile_repeats_5x", "tempo_progression", "race_pace_15k", "brick_run_focus", "short_tempo",
    "strides",
]

SWIM_VARIANTS: List[str] = [
    "css_test", "technique_400s", "css_main_set", "technique_focus", "endurance_1500",
    "css_boost", "drill_intensity", "easy_recovery", "race_prep", "css_pyramid",
    "technique_200s", "easy_swim", "threshold_300s", "css_improved", "race_pace_sets",
    "open_water_sim", "technique_base", "css_pyramid", "endurance_build", "easy_recovery",
    "threshold_400s", "long_css_set", "race_pace_1900", "open_water_practice", "short_speed",
    "race_prep",
]

STRENGTH_VARIANTS: List[str] = [
    "full_body_baseline", "lower_body_focus", "upper_body_focus", "mobility_only", "full_body_power",
    "lower_body_strength", "upper_body_stability", "active_recovery", "full_body", "lower_body",
    "upper_body", "mobility", "full_body_power", "lower_body", "upper_body",
    "mobility", "full_body", "lower_body", "upper_body", "mobility",
    "full_body_power", "lower_body", "upper_body", "mobility", "full_body_light",
    "mobility_only",
]

# Keyed by macrocycle: (first week of the macrocycle, rotation)
BRICK_VARIANTS: Dict[int, Tuple[int, List[str]]] = {
    1: (1, ["long_rides", "endurance_bike", "long_rides", "race_sim", "race_sim", "long_rides", "race_sim"]),
    2: (10, ["olympic_short", "olympic_mid", "olympic_long", "olympic_race_sim",
             "olympic_race_sim", "olympic_mid", "olympic_long"]),
    3: (22, ["70_3_short", "70_3_mid", "70_3_long", "70_3_longer",
             "70_3_race_sim", "70_3_longest", "70_3_race_sim"]),
}

CLIMBING_VARIANTS: List[str] = [
    "bouldering", "top_rope_easy", "bouldering", "top_rope_project",
    "bouldering", "lead_climbing", "bouldering",
]

RUN_FALLBACK = "recovery_run"
BIKE_FALLBACK = "endurance"
SWIM_FALLBACK = "technique_focus"
STRENGTH_FALLBACK = "full_body"
BRICK_FALLBACK = "olympic_mid"

# Pool pace used to turn swim distance into minutes
SWIM_METERS_PER_MINUTE = 35


# ============================================================================
# Session templates
# ============================================================================

RUN_SESSIONS: Dict[str, Dict[str, Any]] = {
    "baseline_5k_tt": {
        "title": "5K Time Trial",
        "description": "Establish baseline. Warmup 15 min, all-out 5K, cooldown 10 min.",
        "target": {"duration": 35, "distance": 5, "pace": "max_effort"},
    },
    "mile_repeats_4x": {
        "title": "Mile Repeats",
        "description": "4 x 1 mile @ threshold pace (5:00-5:15/km) with 90 sec jogging recovery.",
        "target": {"duration": 55, "distance": 8, "pace": "5:00-5:15", "intervals": 4},
    },
    "tempo_20min": {
        "title": "20-Minute Tempo",
        "description": "10 min easy + 20 min at threshold (comfortably hard) + 10 min easy.",
        "target": {"duration": 45, "distance": 8, "pace": "5:20-5:30"},
    },
    "recovery_run": {
        "title": "Recovery Run",
        "description": "Easy aerobic run. Keep HR in Z2, conversational pace.",
        "target": {"duration": 40, "distance": 6, "pace": "6:00-6:30"},
    },
    "fartlek_8x": {
        "title": "Fartlek Play",
        "description": "8 x (1 min hard / 2 min easy). Focus on turnover and feel.",
        "target": {"duration": 50, "distance": 8, "pace": "varied"},
    },
    "short_intervals": {
        "title": "Short Intervals",
        "description": "Warmup + 6 x 800m @ 5K pace (4:45/km) with 90 sec rest + cooldown.",
        "target": {"duration": 50, "distance": 8, "pace": "4:45"},
    },
    "race_pace_10k": {
        "title": "Race Pace 10K",
        "description": "10 min easy + 10K @ Olympic race pace (5:12/km) + 10 min easy.",
        "target": {"duration": 75, "distance": 12, "pace": "5:12"},
    },
    "threshold_pyramid": {
        "title": "Pyramid Intervals",
        "description": "1600m, 1200m, 800m, 400m @ threshold pace, full recovery between.",
        "target": {"duration": 60, "distance": 8, "pace": "5:00-5:15"},
    },
    "hills_8x": {
        "title": "Hill Repeats",
        "description": "8 x 90 sec steep hill @ hard effort, jog down recovery.",
        "target": {"duration": 55, "distance": 7, "intensity": "hill"},
    },
    "recovery_shorts": {
        "title": "Recovery + Strides",
        "description": "30 min easy + 4 x 100m strides (fast, relaxed).",
        "target": {"duration": 40, "distance": 5, "pace": "easy_plus"},
    },
    "tempo_25min": {
        "title": "Extended Tempo",
        "description": "15 min easy + 25 min at threshold + 10 min easy.",
        "target": {"duration": 55, "distance": 10, "pace": "5:15-5:25"},
    },
    "mile_repeats_6x": {
        "title": "Mile Repeats - 6",
        "description": "6 x 1 mile @ threshold with full recovery.",
        "target": {"duration": 75, "distance": 12, "pace": "5:00-5:15"},
    },
    "race_pace_8k": {
        "title": "Race Pace 8K",
        "description": "10 min warmup + 8K @ race pace + 10 min cooldown.",
        "target": {"duration": 65, "distance": 10, "pace": "5:12"},
    },
    "sharpening": {
        "title": "Sharpening Run",
        "description": "20 min easy + 4 x 200m fast (strides) + 10 min easy.",
        "target": {"duration": 40, "distance": 6, "pace": "variable"},
    },
    "base_aerobic": {
        "title": "Aerobic Base Run",
        "description": "Steady Z2 effort. Build aerobic foundation for 70.3.",
        "target": {"duration": 50, "distance": 8, "pace": "5:45-6:00"},
    },
    "tempo_30min": {
        "title": "30-Minute Tempo",
        "description": "15 min easy + 30 min @ tempo pace + 10 min easy.",
        "target": {"duration": 60, "distance": 11, "pace": "5:20-5:30"},
    },
    "long_intervals": {
        "title": "Long Interval Day",
        "description": "2 x 20 min @ threshold with 5 min jog recovery.",
        "target": {"duration": 75, "distance": 14, "pace": "5:10-5:20"},
    },
    "mile_repeats_5x": {
        "title": "Threshold Miles",
        "description": "5 x 1 mile @ 70.3 pace (5:20/km) with 2 min rest.",
        "target": {"duration": 70, "distance": 12, "pace": "5:20"},
    },
    "tempo_progression": {
        "title": "Progression to Tempo",
        "description": "25 min easy + 20 min building to threshold + 15 min threshold.",
        "target": {"duration": 70, "distance": 13, "pace": "progressive"},
    },
    "race_pace_15k": {
        "title": "Long Race Pace",
        "description": "15 min easy + 15K @ 70.3 race pace + 10 min easy.",
        "target": {"duration": 100, "distance": 18, "pace": "5:20"},
    },
    "brick_run_focus": {
        "title": "Off-Bike Run",
        "description": "Practice running off the bike. Focus on form, 30 min at race pace.",
        "target": {"duration": 35, "distance": 6, "pace": "5:20-5:30"},
    },
    "short_tempo": {
        "title": "Short Tempo",
        "description": "15 min easy + 15 min @ threshold + 10 min easy.",
        "target": {"duration": 45, "distance": 8, "pace": "5:15-5:25"},
    },
    "strides": {
        "title": "Strides & Prep",
        "description": "20 min easy + 6 x 100m strides + 10 min easy. Race prep.",
        "target": {"duration": 40, "distance": 6, "pace": "easy"},
    },
}

BIKE_SESSIONS: Dict[str, Dict[str, Any]] = {
    "ftp_test": {
        "title": "FTP Test",
        "description": "20 min test protocol. Warmup 15 min, 20 min max effort, cooldown 10 min.",
        "target": {"duration": 50, "power": "100%", "test": True},
    },
    "sweet_spot": {
        "title": "Sweet Spot Training",
        "description": "2 x 20 min @ 88-92% FTP with 10 min recovery. Sweet spot is race-winning.",
        "target": {"duration": 75, "power": "88-92% FTP", "intervals": 2},
    },
    "threshold_intervals": {
        "title": "Threshold Intervals",
        "description": "3 x 12 min @ threshold (90-95% FTP) with 6 min recovery.",
        "target": {"duration": 70, "power": "90-95% FTP", "intervals": 3},
    },
    "endurance": {
        "title": "Endurance Ride",
        "description": "Steady Z2 ride. Focus on aerobic base, stay in power range.",
        "target": {"duration": 90, "power": "65-75% FTP", "zone": 2},
    },
    "vo2max": {
        "title": "VO2 Max Intervals",
        "description": "5 x 4 min @ VO2 max (105-115% FTP) with 4 min recovery.",
        "target": {"duration": 65, "power": "105-115% FTP", "intervals": 5},
    },
    "climbing_repeats": {
        "title": "Climbing Repeats",
        "description": "Find a hill or use trainer. 6 x 5 min @ threshold, descend recovery.",
        "target": {"duration": 75, "power": "90-95% FTP", "intervals": 6},
    },
    "race_pace": {
        "title": "Olympic Race Pace",
        "description": "3 x 15 min @ Olympic bike power (165W / 76% FTP) with 10 min recovery.",
        "target": {"duration": 80, "power": "165W avg", "intervals": 3},
    },
    "sweet_spot_2x20": {
        "title": "Sweet Spot 2 x 20",
        "description": "Classic workout: 2 x 20 min @ 88-92% FTP, 10 min recovery.",
        "target": {"duration": 70, "power": "88-92% FTP"},
    },
    "threshold_3x15": {
        "title": "Threshold 3 x 15",
        "description": "3 x 15 min @ threshold with 8 min recovery.",
        "target": {"duration": 80, "power": "90-95% FTP", "intervals": 3},
    },
    "recovery_ride": {
        "title": "Active Recovery",
        "description": "Easy spin. No strain, just blood flow.",
        "target": {"duration": 40, "power": "55-65% FTP"},
    },
    "tempo_climbing": {
        "title": "Tempo Climbing",
        "description": "45 min tempo on rolling terrain. Build climbing strength.",
        "target": {"duration": 75, "power": "80-90% FTP"},
    },
    "ftp_boost": {
        "title": "FTP Builder",
        "description": "4 x 10 min @ threshold + 3 x 1 min over-unders. Fresh test format.",
        "target": {"duration": 70, "power": "varied", "intervals": 7},
    },
    "threshold_4x12": {
        "title": "Threshold 4 x 12",
        "description": "4 x 12 min @ threshold with 6 min recovery.",
        "target": {"duration": 85, "power": "90-95% FTP", "intervals": 4},
    },
    "race_simulation": {
        "title": "Bike Race Sim",
        "description": "90 min at variable effort: 30 min Z2, 3 x 10 min @ race power, 15 min build.",
        "target": {"duration": 95, "power": "varied"},
    },
    "base_spin": {
        "title": "Easy Base Ride",
        "description": "60 min easy Z2. Aerobic maintenance.",
        "target": {"duration": 60, "power": "65-75% FTP"},
    },
    "long_endurance": {
        "title": "Long Endurance",
        "description": "2.5-3 hour steady ride. Practice nutrition, stay Z2.",
        "target": {"duration": 180, "power": "65-75% FTP"},
    },
    "tempo": {
        "title": "Extended Tempo",
        "description": "60 min tempo. Build sustainable power.",
        "target": {"duration": 70, "power": "80-90% FTP"},
    },
    "threshold_3x20": {
        "title": "Long Threshold",
        "description": "3 x 20 min @ threshold with 10 min recovery. Key 70.3 workout.",
        "target": {"duration": 110, "power": "90-95% FTP", "intervals": 3},
    },
    "climbing_specific": {
        "title": "Hill Specificity",
        "description": "Practice climbing on hilly route. 1000m equivalent elevation.",
        "target": {"duration": 120, "power": "varied", "elevation": 1000},
    },
    "short_intensity": {
        "title": "Short Intensity",
        "description": "2 x 15 min @ threshold + 4 x 2 min VO2 max. Keep legs sharp.",
        "target": {"duration": 60, "power": "varied"},
    },
    "openers": {
        "title": "Race Openers",
        "description": "30 min easy + 3 x 3 min @ race power + 5 min easy.",
        "target": {"duration": 50, "power": "race_pace"},
    },
}

SWIM_SESSIONS: Dict[str, Dict[str, Any]] = {
    "css_test": {
        "title": "CSS Test",
        "description": "400m TT + 200m TT to establish Critical Swim Speed.",
        "target": {"distance": 1200, "test": True, "focus": "baseline"},
    },
    "technique_400s": {
        "title": "Technique: 400s",
        "description": "6 x 400m with focus: 200m drill + 200m swim @ CSS pace.",
        "target": {"distance": 2400, "drill_ratio": "50%", "focus": "technique"},
    },
    "css_main_set": {
        "title": "CSS Main Set",
        "description": "Warmup + 8 x 200m @ CSS + 15 sec rest + cooldown.",
        "target": {"distance": 2200, "intensity": "css", "focus": "aerobic"},
    },
    "technique_focus": {
        "title": "Drill Intensive",
        "description": "60% of time on drills: catch, rotation, breathing. 4 x 100m sculling.",
        "target": {"distance": 1800, "drill_ratio": "60%", "focus": "technique"},
    },
    "endurance_1500": {
        "title": "Swim Endurance",
        "description": "Continuous 1500m @ comfortable race pace. Build endurance.",
        "target": {"distance": 1800, "intensity": "moderate", "focus": "endurance"},
    },
    "css_boost": {
        "title": "CSS Improvement Set",
        "description": "10 x 100m @ CSS + 10 sec rest. Focus on efficiency.",
        "target": {"distance": 2000, "intensity": "css", "focus": "speed"},
    },
    "drill_intensity": {
        "title": "Drill + Intensity",
        "description": "30% drills, then 6 x 200m @ threshold with 30 sec rest.",
        "target": {"distance": 2200, "drill_ratio": "30%", "focus": "mixed"},
    },
    "easy_recovery": {
        "title": "Recovery Swim",
        "description": "Easy swim focusing on relaxation and long strokes.",
        "target": {"distance": 1500, "intensity": "easy", "focus": "recovery"},
    },
    "race_prep": {
        "title": "Race Prep Swim",
        "description": "15 min warmup + 4 x 50 race pace + 10 min drills. Sighting practice.",
        "target": {"distance": 1600, "focus": "race_specific"},
    },
    "css_pyramid": {
        "title": "CSS Pyramid",
        "description": "200, 400, 600, 400, 200 @ CSS pace. Pyramid structure.",
        "target": {"distance": 2000, "intensity": "css", "focus": "progression"},
    },
    "technique_200s": {
        "title": "Technique: 200s",
        "description": "8 x 200m: 100m drill + 100m swim. High technique focus.",
        "target": {"distance": 2000, "drill_ratio": "50%", "focus": "technique"},
    },
    "easy_swim": {
        "title": "Easy Aerobic",
        "description": "Steady swim, focus on technique, stay relaxed.",
        "target": {"distance": 1600, "intensity": "easy", "focus": "aerobic"},
    },
    "threshold_300s": {
        "title": "Threshold 300s",
        "description": "6 x 300m @ threshold with 20 sec rest.",
        "target": {"distance": 2400, "intensity": "threshold", "focus": "speed"},
    },
    "css_improved": {
        "title": "Improved CSS Set",
        "description": "12 x 100m @ improved CSS pace. Expect faster than Week 1.",
        "target": {"distance": 2200, "intensity": "css", "focus": "progression"},
    },
    "race_pace_sets": {
        "title": "Race Pace Sets",
        "description": "4 x 400m @ Olympic race pace. 30 sec rest between.",
        "target": {"distance": 2400, "intensity": "race_pace", "focus": "specificity"},
    },
    "open_water_sim": {
        "title": "Open Water Sim",
        "description": "OW practice: sighting, drafting, bilateral breathing. Pool version.",
        "target": {"distance": 2000, "focus": "open_water"},
    },
    "technique_base": {
        "title": "Technique Foundation",
        "description": "Focus on catch and rotation. 50% drill, 50% swim.",
        "target": {"distance": 1800, "drill_ratio": "50%", "focus": "technique"},
    },
    "endurance_build": {
        "title": "Swim Endurance Build",
        "description": "Gradually build to 1800m continuous. Aerobic base.",
        "target": {"distance": 2000, "intensity": "moderate", "focus": "endurance"},
    },
    "threshold_400s": {
        "title": "Threshold 400s",
        "description": "5 x 400m @ threshold with 30 sec rest.",
        "target": {"distance": 2600, "intensity": "threshold", "focus": "speed"},
    },
    "long_css_set": {
        "title": "Long CSS Set",
        "description": "10 x 200m @ CSS. Building endurance at race pace.",
        "target": {"distance": 2800, "intensity": "css", "focus": "endurance"},
    },
    "race_pace_1900": {
        "title": "70.3 Race Pace",
        "description": "1900m @ 70.3 race pace. Test nutrition strategy if desired.",
        "target": {"distance": 2200, "intensity": "race_pace", "focus": "specificity"},
    },
    "open_water_practice": {
        "title": "Open Water Practice",
        "description": "If possible, OW session. Otherwise pool with wetsuit simulation.",
        "target": {"distance": 2000, "focus": "open_water"},
    },
    "short_speed": {
        "title": "Speed Burst",
        "description": "8 x 50m fast with full recovery. Keep legs fresh.",
        "target": {"distance": 1600, "intensity": "varied", "focus": "speed"},
    },
}


def _exercises(*rows: Tuple[str, int, str]) -> List[Dict[str, Any]]:
    return [{"name": name, "sets": sets, "reps": reps} for name, sets, reps in rows]


STRENGTH_SESSIONS: Dict[str, Dict[str, Any]] = {
    "full_body_baseline": {
        "title": "Full Body Baseline",
        "description": "Establish baseline strength. Focus on form, moderate weights.",
        "exercises": _exercises(
            ("Goblet Squat", 3, "10-12"), ("Single-Leg Deadlift", 3, "8 each"),
            ("Push-Ups", 3, "15"), ("Plank", 3, "45s"), ("Bent-Over Row", 3, "10"),
        ),
        "duration": 35,
    },
    "lower_body_focus": {
        "title": "Lower Body Power",
        "description": "Legs focus for cycling power and running efficiency.",
        "exercises": _exercises(
            ("Back Squat", 4, "8"), ("Walking Lunges", 3, "12 each"),
            ("Calf Raises", 3, "15"), ("Single-Leg Squat", 2, "8 each"),
        ),
        "duration": 40,
    },
    "upper_body_focus": {
        "title": "Upper Body & Core",
        "description": "Push/pull balance, core stability for running form.",
        "exercises": _exercises(
            ("Bench Press", 3, "10"), ("Pull-Ups", 3, "max"), ("Shoulder Press", 3, "10"),
            ("Side Plank", 3, "30s each"), ("Russian Twist", 3, "20"),
        ),
        "duration": 35,
    },
    "mobility_only": {
        "title": "Mobility & Activation",
        "description": "No heavy lifting. Foam rolling, mobility drills, activation exercises.",
        "exercises": _exercises(
            ("Foam Roll Legs", 1, "5min"), ("Hip Flexor Stretch", 1, "3min"),
            ("Ankle Mobility", 1, "3min"), ("Cat-Cow", 1, "2min"),
        ),
        "duration": 20,
    },
    "lower_body_strength": {
        "title": "Lower Body Strength",
        "description": "Heavy legs for cycling endurance.",
        "exercises": _exercises(
            ("Front Squat", 4, "8"), ("Romanian Deadlift", 3, "10"), ("Leg Press", 3, "12"),
            ("Step-Ups", 3, "10 each"), ("Glute Bridge", 3, "15"),
        ),
        "duration": 40,
    },
    "upper_body_stability": {
        "title": "Upper Body Stability",
        "description": "Shoulder stability, core for running economy.",
        "exercises": _exercises(
            ("Face Pull", 3, "15"), ("Inverted Row", 3, "10"), ("Y-T-W Raises", 1, "each"),
            ("Ab Wheel", 3, "10"), ("Hollow Hold", 3, "30s"),
        ),
        "duration": 30,
    },
    "active_recovery": {
        "title": "Active Recovery",
        "description": "Light movement, blood flow, mobility only.",
        "exercises": _exercises(("Light Stretch", 1, "15min"), ("Walking", 1, "10min")),
        "duration": 25,
    },
    "full_body": {
        "title": "Full Body Maintenance",
        "description": "Maintain strength without fatigue for training.",
        "exercises": _exercises(
            ("Squat", 3, "10"), ("Lunge", 3, "10 each"), ("Push-Up", 3, "12"),
            ("Row", 3, "10"), ("Plank", 3, "60s"),
        ),
        "duration": 35,
    },
    "lower_body": {
        "title": "Lower Body Strength",
        "description": "Cycling and running power focus.",
        "exercises": _exercises(
            ("Squat", 4, "8"), ("Deadlift", 3, "8"), ("Calf Raise", 4, "15"),
            ("Clamshells", 3, "15 each"),
        ),
        "duration": 40,
    },
    "upper_body": {
        "title": "Upper Body & Core",
        "description": "Balance for injury prevention.",
        "exercises": _exercises(
            ("Pull-Up", 3, "max"), ("Push-Up", 3, "15"), ("Row", 3, "10"), ("Side Plank", 3, "45s"),
        ),
        "duration": 30,
    },
    "mobility": {
        "title": "Mobility Session",
        "description": "Joint health, flexibility, recovery focus.",
        "exercises": _exercises(
            ("Hip Mobility", 1, "5min"), ("Shoulder Mobility", 1, "5min"),
            ("Spine Mobility", 1, "5min"), ("Ankle Mobility", 1, "5min"),
        ),
        "duration": 20,
    },
    "full_body_power": {
        "title": "Power Development",
        "description": "Explosive for cycling performance.",
        "exercises": _exercises(
            ("Power Clean", 4, "5"), ("Box Jump", 4, "8"), ("Goblet Squat", 3, "10"),
            ("Landmine Press", 3, "10"),
        ),
        "duration": 40,
    },
    "full_body_light": {
        "title": "Light Maintenance",
        "description": "Keep moving, no fatigue. 50% volume of normal.",
        "exercises": _exercises(("Bodyweight Squat", 2, "20"), ("Push-Ups", 2, "10"), ("Plank", 2, "30s")),
        "duration": 20,
    },
}

BRICK_SESSIONS: Dict[str, Dict[str, Any]] = {
    "long_rides": {
        "title": "Long Endurance Ride",
        "description": "90-120 min Z2 endurance ride. Steady effort, focus on position.",
        "bike": {"duration": 105, "power": "65-75% FTP"},
        "run": None,
    },
    "endurance_bike": {
        "title": "Endurance Bike + Short Run",
        "description": "75 min endurance bike + 15 min easy run off bike.",
        "bike": {"duration": 75, "power": "65-75% FTP"},
        "run": {"duration": 15, "pace": "easy"},
    },
    "race_sim": {
        "title": "Race Simulation Brick",
        "description": "60 min bike @ race power + 20 min run @ race pace.",
        "bike": {"duration": 60, "power": "165W"},
        "run": {"duration": 20, "pace": "5:12"},
    },
    "olympic_short": {
        "title": "Short Olympic Brick",
        "description": "Bike 45 min @ Olympic pace + Run 15 min @ race pace.",
        "bike": {"duration": 45, "power": "165W"},
        "run": {"duration": 15, "pace": "5:12"},
    },
    "olympic_mid": {
        "title": "Olympic Distance Brick",
        "description": "Bike 75 min @ Olympic pace + Run 20 min @ race pace.",
        "bike": {"duration": 75, "power": "165W"},
        "run": {"duration": 20, "pace": "5:12"},
    },
    "olympic_long": {
        "title": "Long Olympic Brick",
        "description": "Bike 90-100 min @ Olympic pace + Run 25 min @ race pace.",
        "bike": {"duration": 95, "power": "165W"},
        "run": {"duration": 25, "pace": "5:12"},
    },
    "olympic_race_sim": {
        "title": "Full Olympic Brick",
        "description": "Bike 120 min @ race power (build to race pace) + Run 30 min @ race pace.",
        "bike": {"duration": 120, "power": "varied"},
        "run": {"duration": 30, "pace": "5:12"},
    },
    "70_3_short": {
        "title": "70.3 Short Brick",
        "description": "Bike 90 min @ 70.3 pace + Run 20 min @ race pace.",
        "bike": {"duration": 90, "power": "155W"},
        "run": {"duration": 20, "pace": "5:20"},
    },
    "70_3_mid": {
        "title": "70.3 Medium Brick",
        "description": "Bike 120 min @ 70.3 pace + Run 30 min @ race pace.",
        "bike": {"duration": 120, "power": "155W"},
        "run": {"duration": 30, "pace": "5:20"},
    },
    "70_3_long": {
        "title": "70.3 Long Brick",
        "description": "Bike 150 min @ 70.3 pace + Run 35 min @ race pace.",
        "bike": {"duration": 150, "power": "155W"},
        "run": {"duration": 35, "pace": "5:20"},
    },
    "70_3_longer": {
        "title": "70.3 Longer Brick",
        "description": "Bike 180 min @ 70.3 pace + Run 40 min @ race pace.",
        "bike": {"duration": 180, "power": "155W"},
        "run": {"duration": 40, "pace": "5:20"},
    },
    "70_3_race_sim": {
        "title": "70.3 Race Simulation",
        "description": "Bike 2.5 hrs @ race power (practice nutrition) + Run 45 min @ race pace.",
        "bike": {"duration": 150, "power": "155W", "nutrition": "practice_70g_carb"},
        "run": {"duration": 45, "pace": "5:20"},
    },
    "70_3_longest": {
        "title": "70.3 Longest Brick",
        "description": "Bike 210 min + Run 60 min. Full simulation, nutrition practice essential.",
        "bike": {"duration": 210, "power": "155W", "nutrition": "full_race_sim"},
        "run": {"duration": 60, "pace": "5:20-5:30"},
    },
}

CLIMBING_SESSIONS: Dict[str, Dict[str, Any]] = {
    "bouldering": {
        "title": "Bouldering Session",
        "description": "Focus on technique and problem-solving. 45 min limit, moderate intensity.",
        "intensity": "moderate",
        "duration": 45,
        "focus": "skill_and_technique",
    },
    "top_rope_easy": {
        "title": "Top Rope - Easy",
        "description": "Easy climbing, focus on movement quality and breathing.",
        "intensity": "easy",
        "duration": 60,
        "focus": "endurance_and_technique",
    },
    "top_rope_project": {
        "title": "Project Climbing",
        "description": "Work on harder routes. Limit attempts, focus on efficiency.",
        "intensity": "hard",
        "duration": 60,
        "focus": "power_and_efficiency",
    },
    "lead_climbing": {
        "title": "Lead Climbing",
        "description": "If gym offers: lead climbing on moderate routes. Otherwise, simulated.",
        "intensity": "moderate",
        "duration": 90,
        "focus": "mental_and_physical",
    },
}

# Recovery week layout, one entry per weekday: (discipline, title, minutes, focus)
RECOVERY_WEEK_TEMPLATE: List[Tuple[str, str, int, str | None]] = [
    ("rest", "Rest Day", 0, None),
    ("bike", "Recovery Spin", 45, "easy_z2"),
    ("run", "Recovery Run", 35, "walk_breaks"),
    ("swim", "Recovery Swim", 30, "technique_easy"),
    ("strength", "Mobility Session", 25, "foam_rolling"),
    ("brick", "Short Brick", 60, "short_easy"),
    ("climbing", "Easy Bouldering", 45, "fun"),
]

RECOVERY_DESCRIPTIONS: Dict[str, str] = {
    "rest": "Complete rest. Your body needs this recovery week.",
    "bike": "Very easy Z1-Z2 spin. No strain, just blood flow.",
    "run": "Walk/run intervals. Keep HR low, 15 sec walk breaks.",
    "swim": "Easy technique swim. Focus on feel, no strain.",
    "strength": "Foam rolling and mobility. No heavy lifting.",
    "brick": "45 min easy bike + 15 min easy walk/run.",
    "climbing": "Easy climbing for fun. No projecting, stay relaxed.",
}
