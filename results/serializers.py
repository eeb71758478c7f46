from rest_framework import serializers

from .models import Result


class ResultSerializer(serializers.ModelSerializer):
    enrollmentId = serializers.IntegerField(source="enrollment_id", read_only=True)
    examId = serializers.IntegerField(source="exam_id", read_only=True)
    studentName = serializers.CharField(source="enrollment.student.full_name", read_only=True)
    rollNumber = serializers.IntegerField(source="enrollment.roll_number", read_only=True)
    totalMarks = serializers.DecimalField(source="total_marks", max_digits=8, decimal_places=2, read_only=True)
    totalFullMarks = serializers.DecimalField(source="total_full_marks", max_digits=8, decimal_places=2, read_only=True)
    percentage = serializers.DecimalField(max_digits=5, decimal_places=2, read_only=True)
    gpa = serializers.DecimalField(max_digits=4, decimal_places=2, read_only=True, allow_null=True)
    finalGrade = serializers.CharField(source="final_grade", read_only=True)
    gradingSystemId = serializers.IntegerField(source="grading_system_id", read_only=True)
    gradingSystem = serializers.CharField(source="grading_system.name", read_only=True)

    class Meta:
        model = Result
        fields = [
            "id", "enrollmentId", "examId", "studentName", "rollNumber",
            "totalMarks", "totalFullMarks", "percentage", "gpa", "finalGrade",
            "rank", "gradingSystemId", "gradingSystem",
        ]


class ProcessResultsSerializer(serializers.Serializer):
    """{ "examId": 1, "classroomId": 3, "gradingSystemId": 2 }  (gradingSystemId optionnel)"""
    examId = serializers.IntegerField()
    classroomId = serializers.IntegerField()
    gradingSystemId = serializers.IntegerField(required=False, allow_null=True)
