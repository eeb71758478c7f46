from rest_framework import serializers


class GradeBookQuerySerializer(serializers.Serializer):
    """?classroom=<id>&exam=<id>&gradingSystem=<id>  (exam et gradingSystem optionnels)"""
    classroom = serializers.IntegerField()
    exam = serializers.IntegerField(required=False)
    gradingSystem = serializers.IntegerField(required=False)


class GradeUpdateSerializer(serializers.Serializer):
    """
    { "enrollmentId": 101, "examId": 1, "subjectId": 4, "marksObtained": 72.5, "remarks": "" }
    marksObtained reste brut: exams.validators.clean_marks s'en charge (messages métier).
    """
    enrollmentId = serializers.IntegerField()
    examId = serializers.IntegerField()
    subjectId = serializers.IntegerField()
    marksObtained = serializers.CharField(allow_blank=True)
    remarks = serializers.CharField(required=False, allow_blank=True, max_length=255)
    gradingSystemId = serializers.IntegerField(required=False, allow_null=True)
