"""Pure grade calculators: letters, averages, GPA, exam scoring and statistics."""
