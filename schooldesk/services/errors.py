class GradeServiceError(Exception):
    """Base class for grade/class maintenance failures"""


class SeedVerificationError(GradeServiceError):
    """Seeded record counts did not match what was created"""

    def __init__(self, expected_grades, actual_grades, expected_classes, actual_classes):
        self.expected_grades = expected_grades
        self.actual_grades = actual_grades
        self.expected_classes = expected_classes
        self.actual_classes = actual_classes
        super().__init__(
            f'Seed verification failed: expected {expected_grades} grades and '
            f'{expected_classes} classes, found {actual_grades} grades and {actual_classes} classes'
        )
