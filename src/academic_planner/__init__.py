"""Academic planner: course tasks and absence budgets for a student."""
