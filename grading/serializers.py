from rest_framework import serializers

from .models import GradingSystem, GradeBand


# -------------------------
#  Lecture
# -------------------------

class GradeBandSerializer(serializers.ModelSerializer):
    gradeName = serializers.CharField(source="grade_name")
    minPercentage = serializers.DecimalField(source="min_percentage", max_digits=5, decimal_places=2)
    maxPercentage = serializers.DecimalField(source="max_percentage", max_digits=5, decimal_places=2)
    points = serializers.DecimalField(max_digits=4, decimal_places=2)

    class Meta:
        model = GradeBand
        fields = ["id", "gradeName", "minPercentage", "maxPercentage", "points"]


class GradingSystemSerializer(serializers.ModelSerializer):
    isDefault = serializers.BooleanField(source="is_default")
    bands = GradeBandSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = GradingSystem
        fields = ["id", "name", "isDefault", "bands", "createdAt", "updatedAt"]


# -------------------------
#  Écriture
# -------------------------

class GradeBandInputSerializer(serializers.Serializer):
    """
    Une tranche telle qu'envoyée par le front:
    { "gradeName": "A", "minPercentage": 80, "maxPercentage": 100, "points": 4 }
    Le contrôle min < max / chevauchements est fait par grading.bands.validate_bands.
    """
    gradeName = serializers.CharField(source="grade_name", max_length=8)
    minPercentage = serializers.DecimalField(source="min_percentage", max_digits=5, decimal_places=2,
                                             min_value=0, max_value=100)
    maxPercentage = serializers.DecimalField(source="max_percentage", max_digits=5, decimal_places=2,
                                             min_value=0, max_value=100)
    points = serializers.DecimalField(max_digits=4, decimal_places=2, min_value=0)


class GradingSystemWriteSerializer(serializers.Serializer):
    """
    Création: { name, isDefault?, bands: [...] }
    Mise à jour (partial=True): { name?, isDefault?, bands? } -- bands remplace tout le jeu
    """
    name = serializers.CharField(max_length=64)
    isDefault = serializers.BooleanField(source="is_default", required=False, default=False)
    bands = GradeBandInputSerializer(many=True, allow_empty=False)

    def to_service_kwargs(self):
        data = self.validated_data
        kwargs = {}
        if "name" in data:
            kwargs["name"] = data["name"]
        if "is_default" in data:
            kwargs["is_default"] = data["is_default"]
        if "bands" in data:
            kwargs["bands"] = [dict(b) for b in data["bands"]]
        return kwargs
