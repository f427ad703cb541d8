"""Serializers for operator accounts and login."""

from __future__ import annotations

from django.contrib.auth import authenticate, get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "first_name",
            "last_name",
            "email",
            "phone",
            "role",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "is_active", "created_at", "updated_at"]


class UserWriteSerializer(serializers.ModelSerializer):
    """Creation and editing of operators by an administrator."""

    password = serializers.CharField(write_only=True, min_length=8, required=False)

    class Meta:
        model = User
        fields = [
            "username",
            "password",
            "first_name",
            "last_name",
            "email",
            "phone",
            "role",
        ]
        extra_kwargs = {
            "first_name": {"required": False, "allow_blank": True},
            "last_name": {"required": False, "allow_blank": True},
            "email": {"required": False, "allow_blank": True},
            "phone": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):  # type: ignore
        if self.instance is None and not attrs.get("password"):
            raise serializers.ValidationError({"password": "Password is required for new users."})
        return attrs

    def create(self, validated_data):  # type: ignore
        password = validated_data.pop("password")
        username = validated_data.pop("username")
        return User.objects.create_user(username, password=password, **validated_data)

    def update(self, instance, validated_data):  # type: ignore
        password = validated_data.pop("password", None)
        for field, value in validated_data.items():
            setattr(instance, field, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class ActiveToggleSerializer(serializers.Serializer):
    active = serializers.BooleanField()


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):  # type: ignore
        user = authenticate(username=attrs["username"], password=attrs["password"])
        if user is None or getattr(user, "is_deleted", False):
            raise serializers.ValidationError("Invalid username or password.")
        attrs["user"] = user
        return attrs
