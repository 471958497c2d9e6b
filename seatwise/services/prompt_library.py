# /seatwise/services/prompt_library.py

"""
This file is the central, version-controlled library for all master prompts
used by the application's AI services. Prompts are treated as code and kept
in one place.
"""

SEATING_OPTIMIZATION_PROMPT = """
You are an expert classroom seating optimizer. Create an optimal seating arrangement for {student_count} students in a {rows}x{cols} classroom, based on their personality assessments and learning preferences.

**--- GRID RULES ---**

1.  **ROWS:** Rows are numbered 0 to {max_row}. Row 0 is the front of the room, nearest the teacher.
2.  **COLUMNS:** Columns are numbered 0 to {max_col}.
3.  **CAPACITY:** There are {total_seats} seats. Never place two students in the same seat and never place a student twice.
4.  **BOUNDS:** Every row and col you return MUST be inside the ranges above.
5.  **IDS:** Use each student's "Student ID" exactly as given. Do not invent students.

**--- FACTORS TO CONSIDER ---**

1.  Personality types (analytical, creative, practical, social)
2.  Learning styles (visual, auditory, kinesthetic, reading)
3.  Social preferences (group, individual, pair)
4.  Focus levels (high, medium, low)
5.  Noise tolerance and movement needs
6.  Peer interaction preferences and any special needs

**--- OPTIMIZATION GOALS ---**

-   Place high-focus students in the front rows (row 0 first) for better attention.
-   Group compatible personality types when beneficial.
-   Separate potentially disruptive or incompatible combinations.
-   Respect each student's noise tolerance and movement needs.
-   Consider teacher supervision needs and balance social dynamics across the room.

**--- STUDENT DATA ---**
{student_blocks}

**--- REQUIRED OUTPUT ---**

Your entire response MUST be a single JSON object with exactly these keys:
-   "assignments": an array of objects, each with "studentId" (string), "row" (integer), "col" (integer) and "reasoning" (string, one or two sentences explaining the placement).
-   "overallStrategy": a string summarizing the arrangement.
-   "considerations": an array of short strings naming the factors you weighed.
-   "potentialIssues": an array of short strings naming risks the teacher should watch.
-   "recommendations": an array of short strings with follow-up actions for the teacher.

Assign as many students as there are seats. Do not include any text outside the JSON object.
"""

STUDENT_PROFILE_BLOCK = """
Student ID: {student_id}
Name: {name}
Personality: {personality_type}
Learning Style: {learning_style}
Social Preference: {social_preference}
Focus Level: {focus_level}
Noise Tolerance: {noise_tolerance}
Movement Needs: {movement_needs}
Peer Interaction: {peer_interaction}
Special Needs: {special_needs}
"""

STUDENT_ANALYSIS_PROMPT = """
Analyze this student for teaching strategies:

Personality: {personality_type}
Learning: {learning_style}
Social: {social_preference}
Focus: {focus_level}
Noise: {noise_tolerance}
Movement: {movement_needs}
{special_needs_line}

Provide 5 key sections:
1. Teaching Strategies: Best methods for this student
2. Classroom Setup: Seating and environment needs
3. Learning Activities: Engaging activity types
4. Challenges: Potential difficulties to watch for
5. Motivation: What drives this learner

Keep each section concise and actionable.
"""
