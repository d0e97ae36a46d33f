SERVICE_NAME = "grading_service"

# Decimal places used when storing and reporting grades
GRADE_DECIMALS = 2

AUTO_CALCULATION_NOTE = "Auto-calculated from assignments and exams"
