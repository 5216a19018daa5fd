"""Bundled reference tables for the default attribution model."""

MUSCLE_TO_PARTS = {
    "Abdominals": ["lower-abdominals", "upper-abdominals"],
    "Abductors": ["gluteus-medius"],
    "Adductors": ["inner-thigh"],
    "Biceps": ["long-head-bicep", "short-head-bicep"],
    "Calves": ["gastrocnemius", "soleus", "tibialis"],
    "Chest": ["mid-lower-pectoralis", "upper-pectoralis"],
    "Forearms": ["wrist-extensors", "wrist-flexors"],
    "Glutes": ["gluteus-maximus", "gluteus-medius"],
    "Hamstrings": ["medial-hamstrings", "lateral-hamstrings"],
    "Lats": ["lats"],
    "Lower Back": ["lowerback"],
    "Neck": ["neck"],
    "Quadriceps": ["outer-quadricep", "rectus-femoris", "inner-quadricep"],
    "Shoulders": ["anterior-deltoid", "lateral-deltoid", "posterior-deltoid"],
    "Traps": ["upper-trapezius", "lower-trapezius", "traps-middle"],
    "Triceps": ["medial-head-triceps", "long-head-triceps", "lateral-head-triceps"],
    "Upper Back": [
        "lats",
        "upper-trapezius",
        "lower-trapezius",
        "traps-middle",
        "posterior-deltoid",
    ],
    "Obliques": ["obliques"],
    # anatomical names
    "chest_clavicular_head": ["upper-pectoralis"],
    "chest_sternal_head": ["mid-lower-pectoralis"],
    "pectoralis_major": ["mid-lower-pectoralis", "upper-pectoralis"],
    "pectoralis_minor": ["mid-lower-pectoralis"],
    "deltoid_anterior": ["anterior-deltoid"],
    "deltoid_lateral": ["lateral-deltoid"],
    "deltoid_posterior": ["posterior-deltoid"],
    "deltoids": ["anterior-deltoid", "lateral-deltoid", "posterior-deltoid"],
    "anterior_deltoid": ["anterior-deltoid"],
    "lateral_deltoid": ["lateral-deltoid"],
    "posterior_deltoid": ["posterior-deltoid"],
    "biceps_brachii": ["long-head-bicep", "short-head-bicep"],
    "triceps_brachii": ["medial-head-triceps", "long-head-triceps", "lateral-head-triceps"],
    "brachialis": ["long-head-bicep", "short-head-bicep"],
    "brachioradialis": ["wrist-flexors"],
    "latissimus_dorsi": ["lats"],
    "trapezius": ["upper-trapezius", "lower-trapezius", "traps-middle"],
    "rhomboid_major": ["traps-middle"],
    "rhomboid_minor": ["traps-middle"],
    "rhomboids": ["traps-middle"],
    "infraspinatus": ["posterior-deltoid"],
    "supraspinatus": ["posterior-deltoid"],
    "teres_major": ["lats"],
    "teres_minor": ["posterior-deltoid"],
    "erector_spinae": ["lowerback"],
    "gluteus_maximus": ["gluteus-maximus"],
    "gluteus_medius": ["gluteus-medius"],
    "gluteus_minimus": ["gluteus-medius"],
    "rectus_femoris": ["rectus-femoris"],
    "vastus_lateralis": ["outer-quadricep"],
    "vastus_medialis": ["inner-quadricep"],
    "vastus_intermedius": ["rectus-femoris"],
    "biceps_femoris": ["lateral-hamstrings"],
    "semitendinosus": ["medial-hamstrings"],
    "semimembranosus": ["medial-hamstrings"],
    "gastrocnemius": ["gastrocnemius"],
    "soleus": ["soleus"],
    "tibialis_anterior": ["tibialis"],
    "hip_adductors": ["inner-thigh"],
    "hip_abductors": ["gluteus-medius"],
    "sartorius": ["inner-quadricep"],
    "gracilis": ["inner-thigh"],
    "iliopsoas": ["lower-abdominals"],
    "psoas": ["lower-abdominals"],
    "rectus_abdominis": ["lower-abdominals", "upper-abdominals"],
    "transverse_abdominis": ["lower-abdominals"],
    "transversus_abdominis": ["lower-abdominals"],
    "internal_oblique": ["obliques"],
    "external_oblique": ["obliques"],
    "serratus_anterior": ["obliques"],
}

# parts not listed here are standalone
PART_GROUPS = {
    "Shoulders": ["anterior-deltoid", "lateral-deltoid", "posterior-deltoid"],
    "Traps": ["upper-trapezius", "lower-trapezius", "traps-middle"],
    "Biceps": ["long-head-bicep", "short-head-bicep"],
    "Triceps": ["medial-head-triceps", "long-head-triceps", "lateral-head-triceps"],
    "Chest": ["mid-lower-pectoralis", "upper-pectoralis"],
    "Quadriceps": ["outer-quadricep", "rectus-femoris", "inner-quadricep"],
    "Hamstrings": ["medial-hamstrings", "lateral-hamstrings"],
    "Glutes": ["gluteus-maximus", "gluteus-medius"],
    "Calves": ["gastrocnemius", "soleus", "tibialis"],
    "Abdominals": ["lower-abdominals", "upper-abdominals"],
    "Forearms": ["wrist-extensors", "wrist-flexors"],
}

PART_TO_HEADLESS = {
    "mid-lower-pectoralis": "chest",
    "upper-pectoralis": "chest",
    "long-head-bicep": "biceps",
    "short-head-bicep": "biceps",
    "medial-head-triceps": "triceps",
    "long-head-triceps": "triceps",
    "lateral-head-triceps": "triceps",
    "wrist-extensors": "forearms",
    "wrist-flexors": "forearms",
    "anterior-deltoid": "shoulders",
    "lateral-deltoid": "shoulders",
    "posterior-deltoid": "shoulders",
    "upper-trapezius": "traps",
    "lower-trapezius": "traps",
    "traps-middle": "traps",
    "lats": "lats",
    "lowerback": "lowerback",
    "lower-abdominals": "abdominals",
    "upper-abdominals": "abdominals",
    "obliques": "obliques",
    "outer-quadricep": "quads",
    "rectus-femoris": "quads",
    "inner-quadricep": "quads",
    "medial-hamstrings": "hamstrings",
    "lateral-hamstrings": "hamstrings",
    "gluteus-maximus": "glutes",
    "gluteus-medius": "glutes",
    "gastrocnemius": "calves",
    "soleus": "calves",
    "tibialis": "calves",
}

HEADLESS_NAMES = {
    "chest": "Chest",
    "biceps": "Biceps",
    "triceps": "Triceps",
    "forearms": "Forearms",
    "shoulders": "Shoulders",
    "traps": "Traps",
    "lats": "Lats",
    "lowerback": "Lower Back",
    "abdominals": "Abs",
    "obliques": "Obliques",
    "quads": "Quads",
    "hamstrings": "Hamstrings",
    "glutes": "Glutes",
    "calves": "Calves",
    "adductors": "Adductors",
}

BODYWEIGHT_EQUIPMENT = {"none", "bodyweight", "body weight", "body only"}

# name: (equipment, primary, secondary)
EXERCISES = {
    "Bench Press (Barbell)": ("Barbell", "Chest", "Shoulders, Triceps"),
    "Incline Bench Press (Dumbbell)": ("Dumbbell", "Chest", "Shoulders, Triceps"),
    "Chest Fly (Machine)": ("Machine", "Chest", "Shoulders"),
    "Push Up": ("None", "Chest", "Shoulders, Triceps"),
    "Chest Dip": ("None", "Chest", "Triceps, Shoulders"),
    "Overhead Press (Barbell)": ("Barbell", "Shoulders", "Triceps"),
    "Lateral Raise (Dumbbell)": ("Dumbbell", "Shoulders", ""),
    "Lever Seated Shoulder Press": ("Machine", "Shoulders", "Triceps"),
    "Face Pull (Cable)": ("Cable", "Shoulders", "Upper Back"),
    "Shrug (Barbell)": ("Barbell", "Traps", "Forearms"),
    "Bicep Curl (Dumbbell)": ("Dumbbell", "Biceps", "Forearms"),
    "Hammer Curl (Dumbbell)": ("Dumbbell", "Biceps", "Forearms"),
    "Triceps Pushdown (Cable)": ("Cable", "Triceps", ""),
    "Skullcrusher (Barbell)": ("Barbell", "Triceps", ""),
    "Wrist Curl (Barbell)": ("Barbell", "Forearms", ""),
    "Pull Up": ("None", "Lats", "Biceps, Upper Back"),
    "Chin Up": ("None", "Lats", "Biceps"),
    "Lat Pulldown (Cable)": ("Cable", "Lats", "Biceps"),
    "Bent Over Row (Barbell)": ("Barbell", "Upper Back", "Lats, Biceps"),
    "Seated Cable Row": ("Cable", "Upper Back", "Lats, Biceps"),
    "Single Arm Row (Dumbbell)": ("Dumbbell", "Lats", "Upper Back, Biceps"),
    "Deadlift (Barbell)": ("Barbell", "Lower Back", "Glutes, Hamstrings, Traps"),
    "Romanian Deadlift (Barbell)": ("Barbell", "Hamstrings", "Glutes, Lower Back"),
    "Back Extension": ("None", "Lower Back", "Glutes, Hamstrings"),
    "Squat (Barbell)": ("Barbell", "Quadriceps", "Glutes, Hamstrings"),
    "Front Squat (Barbell)": ("Barbell", "Quadriceps", "Glutes, Abdominals"),
    "Leg Press (Machine)": ("Machine", "Quadriceps", "Glutes"),
    "Leg Extension (Machine)": ("Machine", "Quadriceps", ""),
    "Bulgarian Split Squat": ("Dumbbell", "Quadriceps", "Glutes, Hamstrings"),
    "Lunge (Dumbbell)": ("Dumbbell", "Quadriceps", "Glutes, Hamstrings"),
    "Lying Leg Curl (Machine)": ("Machine", "Hamstrings", ""),
    "Hip Thrust (Barbell)": ("Barbell", "Glutes", "Hamstrings"),
    "Hip Adduction (Machine)": ("Machine", "Adductors", ""),
    "Hip Abduction (Machine)": ("Machine", "Abductors", ""),
    "Standing Calf Raise": ("Machine", "Calves", ""),
    "Crunch": ("None", "Abdominals", "Obliques"),
    "Hanging Leg Raise": ("None", "Abdominals", "Obliques, Forearms"),
    "Plank": ("None", "Abdominals", "Obliques, Shoulders"),
    "Russian Twist": ("None", "Obliques", "Abdominals"),
    "Neck Curl": ("Plate", "Neck", ""),
    "Burpee": ("None", "Full Body", ""),
    "Clean and Jerk (Barbell)": ("Barbell", "Full Body", ""),
    "Kettlebell Swing": ("Kettlebell", "Glutes", "Hamstrings, Lower Back, Shoulders"),
    "Treadmill": ("Machine", "Cardio", ""),
    "Rowing Machine": ("Machine", "Cardio", ""),
}
