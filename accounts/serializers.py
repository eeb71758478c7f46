from rest_framework import serializers
from .models import TeacherAssignment, User


class ClassAssignmentSerializer(serializers.ModelSerializer):
    classroomId = serializers.IntegerField(source="classroom_id", read_only=True)
    classroom = serializers.StringRelatedField()
    canEdit = serializers.BooleanField(source="can_edit", read_only=True)

    class Meta:
        model = TeacherAssignment
        fields = ["classroomId", "classroom", "canEdit"]


class MeSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source="get_full_name", read_only=True)
    # classes où l'enseignant peut consulter (et éditer si canEdit) le carnet
    classAssignments = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "fullName", "email", "role", "classAssignments"]

    def get_classAssignments(self, obj):
        qs = obj.class_assignments.select_related("classroom").order_by("classroom_id")
        return ClassAssignmentSerializer(qs, many=True).data
